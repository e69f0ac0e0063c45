from .pgsql_database_service import PgSQLDatabaseService, PgSQLConnectionManager

__all__ = ['PgSQLDatabaseService', 'PgSQLConnectionManager']
