"""Request and response models for database connections and queries."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, List
from datetime import datetime

from dbimport.connectors.schemas import DatabaseConfiguration
from dbimport.connectors.sql_types import SQLType


class DatabaseConnectionRequest(BaseModel):
    """Connection parameters, named the way the import form posts them."""
    model_config = ConfigDict(populate_by_name=True)

    connection_name: Optional[str] = Field(None, alias="connectionName")
    database_type: str = Field(..., alias="databaseType")
    database_host: str = Field(..., alias="databaseServer")
    database_port: Optional[int] = Field(None, alias="databasePort", validate_default=True)
    database_user: Optional[str] = Field(None, alias="databaseUser")
    database_password: Optional[str] = Field(None, alias="databasePassword")
    database_name: Optional[str] = Field(None, alias="initialDatabase")
    database_schema: Optional[str] = Field(None, alias="initialSchema")
    use_ssl: bool = Field(False, alias="useSSL")

    @field_validator('database_type')
    @classmethod
    def check_database_type(cls, v):
        """Reject vendors that have no registered driver."""
        if SQLType.for_name(v) is None:
            raise ValueError(f"{v} is not a valid database type or has not been registered for use.")
        return v

    @field_validator('database_port', mode='before')
    @classmethod
    def set_default_port(cls, v, info):
        """Set default port based on database type."""
        if v not in (None, ""):
            return v

        sql_type = SQLType.for_name(info.data.get('database_type'))
        if sql_type is None or sql_type.default_port is None:
            return 0
        return sql_type.default_port

    def to_configuration(self) -> DatabaseConfiguration:
        return DatabaseConfiguration(
            connection_name=self.connection_name,
            database_type=self.database_type,
            database_host=self.database_host,
            database_port=self.database_port or 0,
            database_user=self.database_user,
            database_password=self.database_password,
            database_name=self.database_name,
            database_schema=self.database_schema,
            use_ssl=self.use_ssl,
        )


class DatabaseQueryRequest(DatabaseConnectionRequest):
    """Connection parameters plus the SQL to run."""
    query: str = Field(..., min_length=1)


class SavedConnectionCreate(DatabaseConnectionRequest):
    """Request model for saving a named connection."""
    connection_name: str = Field(..., alias="connectionName", min_length=1, max_length=255)


class SavedConnectionUpdate(BaseModel):
    """Request model for editing a saved connection."""
    model_config = ConfigDict(populate_by_name=True)

    database_type: Optional[str] = Field(None, alias="databaseType")
    database_host: Optional[str] = Field(None, alias="databaseServer")
    database_port: Optional[int] = Field(None, alias="databasePort")
    database_user: Optional[str] = Field(None, alias="databaseUser")
    database_password: Optional[str] = Field(None, alias="databasePassword")
    database_name: Optional[str] = Field(None, alias="initialDatabase")
    database_schema: Optional[str] = Field(None, alias="initialSchema")
    use_ssl: Optional[bool] = Field(None, alias="useSSL")


class SavedConnectionResponse(BaseModel):
    """Response model for a saved connection."""
    model_config = ConfigDict(populate_by_name=True)

    connection_name: str = Field(..., alias="connectionName")
    database_type: str = Field(..., alias="databaseType")
    database_host: Optional[str] = Field(None, alias="databaseServer")
    database_port: int = Field(0, alias="databasePort")
    database_user: Optional[str] = Field(None, alias="databaseUser")
    database_password: Optional[str] = Field(None, alias="databasePassword")
    database_name: Optional[str] = Field(None, alias="initialDatabase")
    database_schema: Optional[str] = Field(None, alias="initialSchema")
    use_ssl: bool = Field(False, alias="useSSL")


class ProjectSummaryResponse(BaseModel):
    """Response model for a stored project."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    encoding: str
    source: Optional[str]
    columns: List[str]
    row_count: int
    created_at: datetime


class ProjectRowsResponse(BaseModel):
    """Response model for a page of project rows."""
    project_id: str
    columns: List[str]
    total: int
    rows: List[Dict[str, Any]]
