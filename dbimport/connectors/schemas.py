from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, List, Dict, Any


class DatabaseType(Enum):
    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"


class DatabaseColumnType(Enum):
    STRING = "STRING"
    NUMBER = "NUMBER"
    DOUBLE = "DOUBLE"
    FLOAT = "FLOAT"
    DATETIME = "DATETIME"
    BOOLEAN = "BOOLEAN"


@dataclass
class DatabaseConfiguration:
    database_type: str
    database_host: str
    database_port: int = 0
    database_user: str = None
    database_password: str = None
    database_name: str = None
    database_schema: Optional[str] = None
    connection_name: Optional[str] = None
    use_ssl: bool = False

    def __repr__(self):
        # keep credentials out of log lines
        return (
            f"DatabaseConfiguration(connection_name={self.connection_name!r}, "
            f"database_type={self.database_type!r}, database_host={self.database_host!r}, "
            f"database_port={self.database_port!r}, database_user={self.database_user!r}, "
            f"database_name={self.database_name!r}, database_schema={self.database_schema!r}, "
            f"use_ssl={self.use_ssl!r})"
        )


@dataclass(frozen=True)
class DatabaseQueryInfo:
    db_config: DatabaseConfiguration
    query: str


@dataclass
class DatabaseColumn:
    name: str
    label: str
    type: DatabaseColumnType = DatabaseColumnType.STRING
    size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'label': self.label,
            'type': self.type.value,
            'size': self.size,
        }


@dataclass
class DatabaseRow:
    index: int
    values: List[Optional[str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DatabaseInfo:
    columns: List[DatabaseColumn] = field(default_factory=list)
    rows: List[DatabaseRow] = field(default_factory=list)
    database_product_name: Optional[str] = None
    database_product_version: Optional[str] = None
    database_major_version: int = 0
    database_minor_version: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'columns': [column.to_dict() for column in self.columns],
            'rows': [row.to_dict() for row in self.rows],
            'databaseProductName': self.database_product_name,
            'databaseProductVersion': self.database_product_version,
            'databaseMajorVersion': self.database_major_version,
            'databaseMinorVersion': self.database_minor_version,
        }
