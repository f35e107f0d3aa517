"""
SQLite Catalog
==============

Catalog service backed by SQLite's schema tables and pragmas.
"""

import sqlite3
from pathlib import Path

import structlog

from ai_query.catalog.base import CatalogError, CatalogService
from ai_query.models import ColumnInfo, DatabaseSchema, TableDetails, TableInfo

logger = structlog.get_logger(__name__)

DEFAULT_SCHEMA = "main"


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class SQLiteCatalog(CatalogService):
    """Reads table, column and index metadata from a SQLite database."""

    def __init__(self, database: str | Path | sqlite3.Connection = ":memory:") -> None:
        """
        Initialize the catalog.

        Args:
            database: Database path, or an open connection to share
        """
        if isinstance(database, sqlite3.Connection):
            self.conn = database
        else:
            self.conn = sqlite3.connect(str(database), check_same_thread=False)

    def close(self) -> None:
        self.conn.close()

    def get_database_tables(self) -> DatabaseSchema:
        try:
            rows = self.conn.execute(
                "SELECT name FROM sqlite_master "
                "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' "
                "ORDER BY name"
            ).fetchall()

            tables = []
            for (name,) in rows:
                (count,) = self.conn.execute(
                    f"SELECT COUNT(*) FROM {_quote_identifier(name)}"
                ).fetchone()
                tables.append(
                    TableInfo(
                        table_name=name,
                        schema_name=DEFAULT_SCHEMA,
                        table_type="BASE TABLE",
                        estimated_rows=count,
                    )
                )
        except sqlite3.Error as e:
            raise CatalogError(f"Failed to list tables: {e}") from e

        return DatabaseSchema(tables=tuple(tables))

    def get_table_details(self, table_name: str, schema_name: str | None = None) -> TableDetails:
        schema_name = schema_name or DEFAULT_SCHEMA
        schema = _quote_identifier(schema_name)
        table = _quote_identifier(table_name)

        try:
            column_rows = self.conn.execute(f"PRAGMA {schema}.table_info({table})").fetchall()
            if not column_rows:
                raise CatalogError(f"Table not found: {schema_name}.{table_name}")

            foreign_keys = {
                row[3]: (row[2], row[4] or "")
                for row in self.conn.execute(
                    f"PRAGMA {schema}.foreign_key_list({table})"
                ).fetchall()
            }

            index_rows = self.conn.execute(
                f"SELECT sql FROM {schema}.sqlite_master "
                "WHERE type = 'index' AND tbl_name = ? AND sql IS NOT NULL "
                "ORDER BY name",
                (table_name,),
            ).fetchall()
        except sqlite3.Error as e:
            raise CatalogError(f"Failed to describe table {table_name}: {e}") from e

        columns = []
        # PRAGMA table_info: cid, name, type, notnull, dflt_value, pk
        for _, name, data_type, notnull, default, pk in column_rows:
            foreign_table, foreign_column = foreign_keys.get(name, ("", ""))
            columns.append(
                ColumnInfo(
                    column_name=name,
                    data_type=data_type or "",
                    is_nullable=not notnull and not pk,
                    column_default="" if default is None else str(default),
                    is_primary_key=bool(pk),
                    is_foreign_key=name in foreign_keys,
                    foreign_table=foreign_table,
                    foreign_column=foreign_column,
                )
            )

        return TableDetails(
            table_name=table_name,
            schema_name=schema_name,
            columns=tuple(columns),
            indexes=tuple(sql for (sql,) in index_rows),
        )

    def explain(self, query_text: str) -> str:
        try:
            rows = self.conn.execute(f"EXPLAIN QUERY PLAN {query_text}").fetchall()
        except sqlite3.Error as e:
            raise CatalogError(f"Failed to execute EXPLAIN query: {e}") from e

        if not rows:
            raise CatalogError("No output from EXPLAIN query")

        # id, parent, notused, detail
        depth = {0: 0}
        lines = []
        for node_id, parent, _, detail in rows:
            level = depth.get(parent, 0) + 1
            depth[node_id] = level
            lines.append("  " * (level - 1) + detail)
        return "\n".join(lines)
