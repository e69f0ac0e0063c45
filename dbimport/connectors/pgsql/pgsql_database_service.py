"""PostgreSQL connector over psycopg2."""
import logging
from typing import Any, Dict, Optional

from dbimport.connectors.schemas import DatabaseConfiguration
from dbimport.connectors.sql_alchemy import SQLAlchemyConnectionManager, SQLAlchemyDatabaseService
from dbimport.core.config import settings


logger = logging.getLogger(__name__)


# pg_type OIDs of the built-in types
PGSQL_TYPE_NAMES = {
    16: 'BOOLEAN',
    20: 'BIGINT',
    21: 'SMALLINT',
    23: 'INTEGER',
    26: 'INTEGER',
    700: 'REAL',
    701: 'DOUBLE',
    1700: 'NUMERIC',
    790: 'DECIMAL',
    18: 'CHAR',
    19: 'VARCHAR',
    25: 'VARCHAR',
    1042: 'CHAR',
    1043: 'VARCHAR',
    1082: 'DATE',
    1083: 'TIME',
    1266: 'TIME',
    1114: 'TIMESTAMP',
    1184: 'TIMESTAMP',
    1560: 'BIT',
    1562: 'BIT',
    114: 'JSON',
    3802: 'JSON',
    2950: 'UUID',
    17: 'BLOB',
}


class PgSQLConnectionManager(SQLAlchemyConnectionManager):
    db_type = "postgresql"

    def _connect_args(self, db_config: DatabaseConfiguration) -> Dict[str, Any]:
        connect_args = {
            "connect_timeout": settings.LOGIN_TIMEOUT,
            "sslmode": "require" if db_config.use_ssl else "prefer",
        }
        if db_config.database_schema:
            connect_args["options"] = f"-c search_path={db_config.database_schema}"
        return connect_args


class PgSQLDatabaseService(SQLAlchemyDatabaseService):
    db_name = "postgresql"
    connection_manager_class = PgSQLConnectionManager

    def _column_type_name(self, type_code) -> Optional[str]:
        return PGSQL_TYPE_NAMES.get(type_code)
