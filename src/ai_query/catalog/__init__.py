"""
Catalog Module
==============

Schema metadata of the target database.
"""

from ai_query.catalog.base import CatalogError, CatalogService
from ai_query.catalog.sqlite import SQLiteCatalog

__all__ = [
    "CatalogError",
    "CatalogService",
    "SQLiteCatalog",
]
