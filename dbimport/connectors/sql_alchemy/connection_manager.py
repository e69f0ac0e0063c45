"""Un-pooled, process-wide connection holder shared by the vendor connection managers."""
import logging
import threading
from typing import Any, Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from dbimport.connectors.exceptions import DatabaseServiceException
from dbimport.connectors.schemas import DatabaseConfiguration
from dbimport.connectors.sql_types import SQLType


logger = logging.getLogger(__name__)


class SQLAlchemyConnectionManager:
    """
    Holds a single connection per vendor.

    Subclasses set ``db_type`` and may override ``_connect_args`` and
    ``build_connection_url``. There is one live instance per subclass; it is
    created lazily by ``get_instance`` and dropped by ``shutdown``.
    """

    db_type: str = None

    _instance: Optional["SQLAlchemyConnectionManager"] = None
    _lock = threading.RLock()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # each vendor keeps its own instance, even when subclassing another vendor
        cls._instance = None

    def __init__(self, sql_type: SQLType, db_config: DatabaseConfiguration):
        self.type = sql_type
        self.engine: Optional[Engine] = None
        self.connection: Optional[Connection] = None
        self._engine_key = None

        logger.info(f"Acquiring unmanaged connection for {self.get_database_url(db_config)}")
        try:
            self._engine_for(db_config).connect().close()
        except SQLAlchemyError as e:
            self._dispose()
            raise DatabaseServiceException.from_sqlalchemy(e)

    @classmethod
    def get_instance(cls, db_config: DatabaseConfiguration) -> "SQLAlchemyConnectionManager":
        """Return the vendor's manager, creating it on first use."""
        with cls._lock:
            if cls._instance is None:
                sql_type = SQLType.for_name(db_config.database_type)
                if sql_type is None:
                    raise DatabaseServiceException(
                        f"{db_config.database_type} is not a valid database type "
                        f"or has not been registered for use."
                    )
                cls._instance = cls(cls._own_type() or sql_type, db_config)
            return cls._instance

    @classmethod
    def test_connection(cls, db_config: DatabaseConfiguration) -> bool:
        """Open and close a fresh connection."""
        with cls._lock:
            manager = cls.get_instance(db_config)
            try:
                connection = manager._engine_for(db_config).connect()
                connection.close()
                return True
            except SQLAlchemyError as e:
                logger.error(f"Test connection failed: {e}")
                raise DatabaseServiceException.from_sqlalchemy(e)

    @classmethod
    def get_connection(cls, db_config: DatabaseConfiguration, new_connection: bool) -> Connection:
        """
        Return the cached connection, or open a new one.

        A new connection is opened when ``new_connection`` is set, when the
        cached one is closed or when the configuration points somewhere else.
        """
        with cls._lock:
            manager = cls.get_instance(db_config)
            try:
                engine = manager._engine_for(db_config)
                if manager.connection is not None and not new_connection:
                    if not manager.connection.closed:
                        return manager.connection

                manager._close_connection()
                manager.connection = engine.connect()
                return manager.connection

            except SQLAlchemyError as e:
                logger.error(f"Couldn't get a connection: {e}")
                raise DatabaseServiceException.from_sqlalchemy(e)

    @classmethod
    def shutdown(cls) -> None:
        """Close the cached connection and forget the instance."""
        with cls._lock:
            if cls._instance is None:
                return
            cls._instance._dispose()
            cls._instance = None

    @classmethod
    def build_connection_url(cls, db_config: DatabaseConfiguration) -> URL:
        """Build the SQLAlchemy URL; a zero port means the driver default."""
        sql_type = cls._own_type() or SQLType.for_name(db_config.database_type)
        if sql_type is None:
            raise DatabaseServiceException(
                f"{db_config.database_type} is not a valid database type "
                f"or has not been registered for use."
            )
        return URL.create(
            drivername=sql_type.drivername,
            username=db_config.database_user or None,
            password=db_config.database_password or None,
            host=db_config.database_host or None,
            port=db_config.database_port or None,
            database=db_config.database_name or None,
        )

    @classmethod
    def get_database_url(cls, db_config: DatabaseConfiguration) -> str:
        return cls.build_connection_url(db_config).render_as_string(hide_password=True)

    @classmethod
    def _own_type(cls) -> Optional[SQLType]:
        return SQLType.for_name(cls.db_type) if cls.db_type else None

    def _connect_args(self, db_config: DatabaseConfiguration) -> Dict[str, Any]:
        return {}

    def _engine_for(self, db_config: DatabaseConfiguration) -> Engine:
        """Engine for the configuration; rebuilt when the target changes."""
        url = self.build_connection_url(db_config)
        connect_args = self._connect_args(db_config)
        key = (url, repr(sorted(connect_args.items())))

        if self.engine is None or self._engine_key != key:
            self._dispose()
            self.engine = create_engine(
                url,
                poolclass=NullPool,
                connect_args=connect_args,
                echo=False
            )
            self._engine_key = key
        return self.engine

    def _close_connection(self) -> None:
        if self.connection is None:
            return
        try:
            self.connection.close()
        except SQLAlchemyError as e:
            logger.warning(f"Unmanaged connection could not be closed: {e}")
        self.connection = None

    def _dispose(self) -> None:
        self._close_connection()
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self._engine_key = None
