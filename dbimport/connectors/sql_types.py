"""Registry of the database vendors the connectors know how to reach."""
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SQLType:
    """A registered vendor: its identifier, SQLAlchemy driver name and defaults."""
    identifier: str
    drivername: str
    product_name: str
    default_port: Optional[int] = None
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def for_name(name: Optional[str]) -> Optional["SQLType"]:
        """Resolve a vendor by identifier or alias, case-insensitively."""
        if not name:
            return None
        with _lock:
            return _registry.get(name.strip().lower())

    @staticmethod
    def registered() -> List["SQLType"]:
        with _lock:
            return sorted(set(_registry.values()), key=lambda sql_type: sql_type.identifier)


_registry: Dict[str, SQLType] = {}
_lock = threading.Lock()


def register_sql_driver(identifier: str, drivername: str, product_name: str,
                        default_port: Optional[int] = None,
                        aliases: Tuple[str, ...] = ()) -> SQLType:
    """Register a vendor. Re-registering an identifier replaces the previous entry."""
    sql_type = SQLType(
        identifier=identifier.lower(),
        drivername=drivername,
        product_name=product_name,
        default_port=default_port,
        aliases=tuple(alias.lower() for alias in aliases),
    )
    with _lock:
        for name in (sql_type.identifier,) + sql_type.aliases:
            _registry[name] = sql_type
    logger.debug(f"Registered SQL driver {drivername} for {identifier}")
    return sql_type


register_sql_driver("mysql", "mysql+pymysql", "MySQL", 3306)
register_sql_driver("mariadb", "mariadb+pymysql", "MariaDB", 3306)
register_sql_driver("postgresql", "postgresql+psycopg2", "PostgreSQL", 5432, aliases=("pgsql", "postgres"))
register_sql_driver("sqlite", "sqlite", "SQLite")
