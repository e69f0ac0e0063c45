"""SQLite connector; the database name is the path of the database file."""
from typing import Any, Dict, Optional

from sqlalchemy.engine import URL

from dbimport.connectors.schemas import DatabaseConfiguration
from dbimport.connectors.sql_alchemy import SQLAlchemyConnectionManager, SQLAlchemyDatabaseService
from dbimport.core.config import settings


class SQLiteConnectionManager(SQLAlchemyConnectionManager):
    db_type = "sqlite"

    @classmethod
    def build_connection_url(cls, db_config: DatabaseConfiguration) -> URL:
        # host, port and credentials have no meaning for a database file
        return URL.create(drivername="sqlite", database=db_config.database_name or None)

    def _connect_args(self, db_config: DatabaseConfiguration) -> Dict[str, Any]:
        return {"timeout": settings.LOGIN_TIMEOUT, "check_same_thread": False}


class SQLiteDatabaseService(SQLAlchemyDatabaseService):
    """SQLite reports no column types on the cursor, so every column is a STRING."""

    db_name = "sqlite"
    connection_manager_class = SQLiteConnectionManager

    def build_limit_query(self, limit: Optional[int], offset: Optional[int], query: str) -> str:
        if limit is None and offset is not None:
            limit = -1
        return super().build_limit_query(limit, offset, query)
