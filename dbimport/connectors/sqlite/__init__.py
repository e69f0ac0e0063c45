from .sqlite_database_service import SQLiteDatabaseService, SQLiteConnectionManager

__all__ = ['SQLiteDatabaseService', 'SQLiteConnectionManager']
