"""SQLAlchemy-based connection manager and database service shared by every vendor."""
from .connection_manager import SQLAlchemyConnectionManager
from .database_service import SQLAlchemyDatabaseService

__all__ = ['SQLAlchemyConnectionManager', 'SQLAlchemyDatabaseService']
