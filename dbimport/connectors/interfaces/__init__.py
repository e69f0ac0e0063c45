from .database_service_interface import DatabaseServiceInterface
from dbimport.connectors.schemas import (
    DatabaseConfiguration,
    DatabaseQueryInfo,
    DatabaseColumn,
    DatabaseColumnType,
    DatabaseInfo,
    DatabaseRow,
    DatabaseType,
)

__all__ = [
    'DatabaseServiceInterface',
    'DatabaseConfiguration',
    'DatabaseQueryInfo',
    'DatabaseColumn',
    'DatabaseColumnType',
    'DatabaseInfo',
    'DatabaseRow',
    'DatabaseType',
]
