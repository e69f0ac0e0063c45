"""Query execution shared by the vendor database services."""
import logging
from typing import List, Optional, Type

from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.exc import SQLAlchemyError

from dbimport.connectors.exceptions import DatabaseServiceException
from dbimport.connectors.interfaces import DatabaseServiceInterface
from dbimport.connectors.schemas import DatabaseConfiguration, DatabaseColumn, DatabaseInfo, DatabaseRow
from dbimport.connectors.sql_alchemy.connection_manager import SQLAlchemyConnectionManager
from dbimport.connectors.sql_types import SQLType
from dbimport.connectors.utils import get_db_column_type, to_cell_string


logger = logging.getLogger(__name__)


class SQLAlchemyDatabaseService(DatabaseServiceInterface):
    """
    Runs literal SQL through a vendor connection manager and copies the
    results into DatabaseColumn / DatabaseRow objects.

    Supports: MySQL, MariaDB, PostgreSQL and SQLite through vendor subclasses.
    """

    db_name: str = None
    connection_manager_class: Type[SQLAlchemyConnectionManager] = SQLAlchemyConnectionManager

    _instance = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._instance = None

    @classmethod
    def get_instance(cls) -> "SQLAlchemyDatabaseService":
        if cls._instance is None:
            cls._instance = cls()
            logger.debug(f"{cls.__name__} instance: {cls._instance}")
        return cls._instance

    @property
    def manager(self) -> Type[SQLAlchemyConnectionManager]:
        return self.connection_manager_class

    def test_connection(self, db_config: DatabaseConfiguration) -> bool:
        return self.manager.test_connection(db_config)

    def connect(self, db_config: DatabaseConfiguration) -> DatabaseInfo:
        """Connect and report the server's product name and version."""
        try:
            connection = self.manager.get_connection(db_config, True)
            version_info = tuple(connection.dialect.server_version_info or ())
            numeric = [part for part in version_info if isinstance(part, int)]

            sql_type = SQLType.for_name(self.db_name) or SQLType.for_name(db_config.database_type)
            return DatabaseInfo(
                database_product_name=sql_type.product_name if sql_type else connection.dialect.name,
                database_product_version=".".join(str(part) for part in version_info),
                database_major_version=numeric[0] if len(numeric) > 0 else 0,
                database_minor_version=numeric[1] if len(numeric) > 1 else 0,
            )

        except SQLAlchemyError as e:
            logger.error(f"SQL error while reading metadata: {e}")
            raise DatabaseServiceException.from_sqlalchemy(e)

    def execute_query(self, db_config: DatabaseConfiguration, query: str) -> DatabaseInfo:
        try:
            connection = self.manager.get_connection(db_config, False)
            result = self._execute(connection, query)
            try:
                columns = self._read_columns(result)
                rows = self._read_rows(result)
            finally:
                result.close()

            return DatabaseInfo(columns=columns, rows=rows)

        except SQLAlchemyError as e:
            logger.error(f"SQL error while executing query: {e}")
            raise DatabaseServiceException.from_sqlalchemy(e)
        finally:
            self.manager.shutdown()

    def get_columns(self, db_config: DatabaseConfiguration, query: str) -> List[DatabaseColumn]:
        try:
            connection = self.manager.get_connection(db_config, True)
            result = self._execute(connection, query)
            try:
                return self._read_columns(result)
            finally:
                result.close()

        except SQLAlchemyError as e:
            logger.error(f"SQL error while reading columns: {e}")
            raise DatabaseServiceException.from_sqlalchemy(e)

    def get_rows(self, db_config: DatabaseConfiguration, query: str) -> List[DatabaseRow]:
        try:
            connection = self.manager.get_connection(db_config, False)
            result = self._execute(connection, query)
            try:
                return self._read_rows(result)
            finally:
                result.close()

        except SQLAlchemyError as e:
            logger.error(f"SQL error while reading rows: {e}")
            raise DatabaseServiceException.from_sqlalchemy(e)

    def test_query(self, db_config: DatabaseConfiguration, query: str) -> DatabaseInfo:
        result = None
        try:
            connection = self.manager.get_connection(db_config, True)
            result = self._execute(connection, query)
            return DatabaseInfo()

        except SQLAlchemyError as e:
            logger.error(f"SQL error while testing query: {e}")
            raise DatabaseServiceException.from_sqlalchemy(e)
        finally:
            if result is not None:
                result.close()
            self.manager.shutdown()

    def build_limit_query(self, limit: Optional[int], offset: Optional[int], query: str) -> str:
        statement = query.strip().rstrip(";").rstrip()

        if limit is not None:
            statement += f"\nLIMIT {limit}"

        if offset is not None:
            statement += f"\nOFFSET {offset}"

        return statement

    def get_database_url(self, db_config: DatabaseConfiguration) -> str:
        return self.manager.get_database_url(db_config)

    def get_connection(self, db_config: DatabaseConfiguration) -> Connection:
        return self.manager.get_connection(db_config, True)

    def close_connection(self) -> None:
        self.manager.shutdown()

    def _column_type_name(self, type_code) -> Optional[str]:
        """Generic SQL type name for a DBAPI cursor type code."""
        return None

    def _execute(self, connection: Connection, query: str) -> CursorResult:
        logger.info(f"Executing SQL query: {query[:100]}")
        # no_parameters keeps the driver from interpreting % and : in user SQL
        return connection.exec_driver_sql(
            query,
            execution_options={"stream_results": True, "no_parameters": True}
        )

    def _read_columns(self, result: CursorResult) -> List[DatabaseColumn]:
        if not result.returns_rows or result.cursor is None or not result.cursor.description:
            return []

        columns = []
        for description in result.cursor.description:
            name, type_code = description[0], description[1]
            display_size, internal_size = description[2], description[3]
            size = display_size if display_size and display_size > 0 else internal_size
            columns.append(DatabaseColumn(
                name=name,
                label=name,
                type=get_db_column_type(self._column_type_name(type_code)),
                size=max(size or 0, 0)
            ))
        return columns

    def _read_rows(self, result: CursorResult) -> List[DatabaseRow]:
        if not result.returns_rows:
            return []

        rows = []
        for index, raw in enumerate(result):
            rows.append(DatabaseRow(index=index, values=[to_cell_string(value) for value in raw]))
        return rows
