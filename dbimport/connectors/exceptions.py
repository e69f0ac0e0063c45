"""Errors raised by the database connectors."""
from typing import Any, Dict, Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError


class DatabaseServiceException(Exception):
    """A connector failure, optionally carrying the driver's SQL state and error code."""

    def __init__(self, message: str, sql_exception: bool = False,
                 sql_state: Optional[str] = None, sql_code: int = 0):
        super().__init__(message)
        self.message = message
        self.sql_exception = sql_exception
        self.sql_state = sql_state
        self.sql_code = sql_code

    @classmethod
    def from_sqlalchemy(cls, error: SQLAlchemyError) -> "DatabaseServiceException":
        """Translate a SQLAlchemy error, pulling SQLSTATE / vendor codes off the DBAPI error."""
        sql_state = None
        sql_code = 0
        message = str(error)

        if isinstance(error, DBAPIError) and error.orig is not None:
            orig = error.orig
            # psycopg2 exposes the SQLSTATE as pgcode
            sql_state = getattr(orig, 'pgcode', None) or getattr(orig, 'sqlstate', None)
            args = getattr(orig, 'args', ())
            # PyMySQL errors are (code, message)
            if args and isinstance(args[0], int):
                sql_code = args[0]
                if len(args) > 1:
                    message = str(args[1])
            else:
                message = str(orig).strip() or message

        return cls(message, sql_exception=True, sql_state=sql_state, sql_code=sql_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'message': self.message,
            'sqlState': self.sql_state,
            'errorCode': self.sql_code,
        }
