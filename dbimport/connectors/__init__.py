"""Database connector package exports."""

from .exceptions import DatabaseServiceException
from .service_factory import DatabaseServiceFactory

__all__ = ["DatabaseServiceException", "DatabaseServiceFactory"]
