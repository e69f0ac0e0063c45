"""Helpers shared by the vendor database services."""
from datetime import date, datetime, time
from typing import Any, Optional

from dbimport.connectors.schemas import DatabaseColumnType


_TYPE_NAME_MAP = {
    # integer family
    'BIGINT': DatabaseColumnType.NUMBER,
    'INTEGER': DatabaseColumnType.NUMBER,
    'INT': DatabaseColumnType.NUMBER,
    'MEDIUMINT': DatabaseColumnType.NUMBER,
    'SMALLINT': DatabaseColumnType.NUMBER,
    'TINYINT': DatabaseColumnType.NUMBER,
    'YEAR': DatabaseColumnType.NUMBER,
    # floating point
    'DOUBLE': DatabaseColumnType.DOUBLE,
    'REAL': DatabaseColumnType.DOUBLE,
    'FLOAT': DatabaseColumnType.FLOAT,
    'DECIMAL': DatabaseColumnType.FLOAT,
    'NUMERIC': DatabaseColumnType.FLOAT,
    # temporal
    'DATE': DatabaseColumnType.DATETIME,
    'TIME': DatabaseColumnType.DATETIME,
    'TIMESTAMP': DatabaseColumnType.DATETIME,
    'DATETIME': DatabaseColumnType.DATETIME,
    # boolean
    'BOOLEAN': DatabaseColumnType.BOOLEAN,
    'BIT': DatabaseColumnType.BOOLEAN,
}


def get_db_column_type(type_name: Optional[str]) -> DatabaseColumnType:
    """Map a generic SQL type name to the logical column type used by the importer."""
    if not type_name:
        return DatabaseColumnType.STRING
    return _TYPE_NAME_MAP.get(type_name.upper(), DatabaseColumnType.STRING)


def to_cell_string(value: Any) -> Optional[str]:
    """Render a driver value the way it is stored in a DatabaseRow."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)
