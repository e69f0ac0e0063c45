from .mariadb_database_service import MariaDBDatabaseService, MariaDBConnectionManager

__all__ = ['MariaDBDatabaseService', 'MariaDBConnectionManager']
