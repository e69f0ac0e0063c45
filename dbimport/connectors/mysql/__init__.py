from .mysql_database_service import MySQLDatabaseService, MySQLConnectionManager

__all__ = ['MySQLDatabaseService', 'MySQLConnectionManager']
