from abc import ABC, abstractmethod
from typing import List, Optional

from dbimport.connectors.schemas import DatabaseConfiguration, DatabaseColumn, DatabaseInfo, DatabaseRow


class DatabaseServiceInterface(ABC):

    @abstractmethod
    def test_connection(self, db_config: DatabaseConfiguration) -> bool:
        """
        Test database connection without keeping it open.

        Args:
            db_config: Database connection configuration

        Returns:
            bool: True if a connection could be opened
        """
        pass

    @abstractmethod
    def connect(self, db_config: DatabaseConfiguration) -> DatabaseInfo:
        """
        Connect and read the server's product metadata.

        Args:
            db_config: Database connection configuration

        Returns:
            DatabaseInfo: Product name and version, no rows
        """
        pass

    @abstractmethod
    def execute_query(self, db_config: DatabaseConfiguration, query: str) -> DatabaseInfo:
        """
        Execute a query and collect its columns and every row.

        Args:
            db_config: Database connection configuration
            query: Literal SQL text

        Returns:
            DatabaseInfo: Columns and rows of the result
        """
        pass

    @abstractmethod
    def get_columns(self, db_config: DatabaseConfiguration, query: str) -> List[DatabaseColumn]:
        """
        Describe the columns a query produces.

        Args:
            db_config: Database connection configuration
            query: Literal SQL text

        Returns:
            List[DatabaseColumn]: One descriptor per result column
        """
        pass

    @abstractmethod
    def get_rows(self, db_config: DatabaseConfiguration, query: str) -> List[DatabaseRow]:
        """
        Fetch the rows a query produces.

        Args:
            db_config: Database connection configuration
            query: Literal SQL text

        Returns:
            List[DatabaseRow]: Rows indexed from zero
        """
        pass

    @abstractmethod
    def test_query(self, db_config: DatabaseConfiguration, query: str) -> DatabaseInfo:
        """
        Run a query only to check that the server accepts it.

        Args:
            db_config: Database connection configuration
            query: Literal SQL text

        Returns:
            DatabaseInfo: Empty result
        """
        pass

    @abstractmethod
    def build_limit_query(self, limit: Optional[int], offset: Optional[int], query: str) -> str:
        """
        Wrap a query so that it returns one page of rows.

        Args:
            limit: Maximum number of rows, or None
            offset: Number of rows to skip, or None
            query: Literal SQL text

        Returns:
            str: The paged query
        """
        pass

    @abstractmethod
    def get_database_url(self, db_config: DatabaseConfiguration) -> str:
        """Connection URL for the configuration, with the password masked."""
        pass

    @abstractmethod
    def get_connection(self, db_config: DatabaseConfiguration):
        """Open a fresh connection through the vendor's connection manager."""
        pass

    @abstractmethod
    def close_connection(self) -> None:
        """Close the vendor's cached connection."""
        pass
