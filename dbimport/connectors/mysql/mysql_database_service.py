"""MySQL connector over PyMySQL."""
import logging
from typing import Any, Dict, Optional

from pymysql.constants import FIELD_TYPE

from dbimport.connectors.schemas import DatabaseConfiguration
from dbimport.connectors.sql_alchemy import SQLAlchemyConnectionManager, SQLAlchemyDatabaseService
from dbimport.core.config import settings


logger = logging.getLogger(__name__)


MYSQL_TYPE_NAMES = {
    FIELD_TYPE.TINY: 'TINYINT',
    FIELD_TYPE.SHORT: 'SMALLINT',
    FIELD_TYPE.LONG: 'INTEGER',
    FIELD_TYPE.INT24: 'MEDIUMINT',
    FIELD_TYPE.LONGLONG: 'BIGINT',
    FIELD_TYPE.YEAR: 'YEAR',
    FIELD_TYPE.FLOAT: 'FLOAT',
    FIELD_TYPE.DOUBLE: 'DOUBLE',
    FIELD_TYPE.DECIMAL: 'DECIMAL',
    FIELD_TYPE.NEWDECIMAL: 'DECIMAL',
    FIELD_TYPE.DATE: 'DATE',
    FIELD_TYPE.NEWDATE: 'DATE',
    FIELD_TYPE.TIME: 'TIME',
    FIELD_TYPE.DATETIME: 'DATETIME',
    FIELD_TYPE.TIMESTAMP: 'TIMESTAMP',
    FIELD_TYPE.BIT: 'BIT',
    FIELD_TYPE.VARCHAR: 'VARCHAR',
    FIELD_TYPE.VAR_STRING: 'VARCHAR',
    FIELD_TYPE.STRING: 'CHAR',
    FIELD_TYPE.ENUM: 'CHAR',
    FIELD_TYPE.SET: 'CHAR',
    FIELD_TYPE.JSON: 'JSON',
    FIELD_TYPE.BLOB: 'BLOB',
    FIELD_TYPE.TINY_BLOB: 'BLOB',
    FIELD_TYPE.MEDIUM_BLOB: 'BLOB',
    FIELD_TYPE.LONG_BLOB: 'BLOB',
    FIELD_TYPE.GEOMETRY: 'GEOMETRY',
}


class MySQLConnectionManager(SQLAlchemyConnectionManager):
    db_type = "mysql"

    def _connect_args(self, db_config: DatabaseConfiguration) -> Dict[str, Any]:
        connect_args = {"connect_timeout": settings.LOGIN_TIMEOUT}
        if db_config.use_ssl:
            # no CA configured: encrypt without verifying the server certificate
            connect_args["ssl"] = {"check_hostname": False}
        return connect_args


class MySQLDatabaseService(SQLAlchemyDatabaseService):
    db_name = "mysql"
    connection_manager_class = MySQLConnectionManager

    def _column_type_name(self, type_code) -> Optional[str]:
        return MYSQL_TYPE_NAMES.get(type_code)
