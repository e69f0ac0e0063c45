from typing import List

from dbimport.connectors.exceptions import DatabaseServiceException
from dbimport.connectors.interfaces import DatabaseServiceInterface
from dbimport.connectors.mariadb import MariaDBDatabaseService
from dbimport.connectors.mysql import MySQLDatabaseService
from dbimport.connectors.pgsql import PgSQLDatabaseService
from dbimport.connectors.schemas import DatabaseType
from dbimport.connectors.sql_types import SQLType
from dbimport.connectors.sqlite import SQLiteDatabaseService


class DatabaseServiceFactory:
    """Factory class for looking up the database service of a vendor."""

    _services = {
        DatabaseType.MYSQL: MySQLDatabaseService,
        DatabaseType.MARIADB: MariaDBDatabaseService,
        DatabaseType.POSTGRESQL: PgSQLDatabaseService,
        DatabaseType.SQLITE: SQLiteDatabaseService,
    }

    @staticmethod
    def get(database_type) -> DatabaseServiceInterface:
        """Return the service for a DatabaseType or a vendor name such as 'pgsql'."""
        if isinstance(database_type, DatabaseType):
            db_type = database_type
        else:
            sql_type = SQLType.for_name(database_type)
            if sql_type is None:
                raise DatabaseServiceException(f"Database type {database_type} is not supported")
            db_type = DatabaseType(sql_type.identifier)

        service_class = DatabaseServiceFactory._services.get(db_type)
        if service_class is None:
            raise DatabaseServiceException(f"Database type {db_type.value} is not supported")
        return service_class.get_instance()

    @staticmethod
    def get_supported_databases() -> List[DatabaseType]:
        """Get list of supported database types."""
        return list(DatabaseServiceFactory._services.keys())
