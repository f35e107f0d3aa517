"""
Catalog Service Interface
=========================

Read-only access to the metadata of the target database.
"""

from abc import ABC, abstractmethod

from ai_query.models import DatabaseSchema, TableDetails


class CatalogError(Exception):
    """Raised when catalog metadata cannot be retrieved."""

    pass


class CatalogService(ABC):
    """Abstract interface for database catalog providers."""

    @abstractmethod
    def get_database_tables(self) -> DatabaseSchema:
        """
        List the user tables of the database.

        Returns:
            DatabaseSchema snapshot, system tables excluded

        Raises:
            CatalogError: If the listing fails
        """
        pass

    @abstractmethod
    def get_table_details(self, table_name: str, schema_name: str | None = None) -> TableDetails:
        """
        Describe the columns and indexes of one table.

        Args:
            table_name: Table to inspect
            schema_name: Schema holding the table (implementation default if None)

        Raises:
            CatalogError: If the table is unknown or the lookup fails
        """
        pass

    @abstractmethod
    def explain(self, query_text: str) -> str:
        """
        Return the execution plan of a query as text.

        Raises:
            CatalogError: If the plan cannot be produced
        """
        pass
