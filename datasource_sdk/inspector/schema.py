"""Table, column and key metadata read from a live connection."""

from typing import Any, Dict, List, Optional

from sqlalchemy import inspect
from sqlalchemy.engine.reflection import Inspector
from sqlalchemy.exc import NoSuchTableError

from datasource_sdk.clients.sql import BaseSQLClient
from datasource_sdk.common.error_codes import CompositePrimaryKeyError, QueryServiceError
from datasource_sdk.dto.columns import ForeignKeyInfo, TableInfo
from datasource_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)


class SchemaInspector:
    """
    Reads engine metadata through SQLAlchemy's runtime inspection API.

    One inspector is bound to one open client. Reflection results are cached
    by SQLAlchemy for the lifetime of the inspector.
    """

    def __init__(self, sql_client: BaseSQLClient, schema: Optional[str] = None):
        self.sql_client = sql_client
        self.schema = schema
        self._inspector: Optional[Inspector] = None

    @property
    def inspector(self) -> Inspector:
        if self._inspector is None:
            self._inspector = inspect(self.sql_client.get_connection())
        return self._inspector

    def get_tables(self) -> List[TableInfo]:
        tables = []
        for name in self.inspector.get_table_names(schema=self.schema):
            try:
                comment = self.inspector.get_table_comment(name, schema=self.schema)
            except NotImplementedError:
                comment = {}
            tables.append(
                TableInfo(name=name, schema=self.schema, comment=comment.get("text"))
            )
        return tables

    def has_table(self, table_name: str) -> bool:
        return self.inspector.has_table(table_name, schema=self.schema)

    def _ensure_table(self, table_name: str) -> None:
        if not self.has_table(table_name):
            raise QueryServiceError(
                QueryServiceError.TABLE_NOT_FOUND_ERROR,
                f"Table {table_name} does not exist.",
            )

    def get_primary_key_columns(self, table_name: str) -> List[str]:
        self._ensure_table(table_name)
        constraint = self.inspector.get_pk_constraint(table_name, schema=self.schema)
        return list(constraint.get("constrained_columns") or [])

    def get_primary_key_column(self, table_name: str) -> Optional[str]:
        """
        Returns:
            The primary key column, or None when the table has no primary key.

        Raises:
            CompositePrimaryKeyError: The primary key spans several columns.
        """
        columns = self.get_primary_key_columns(table_name)
        if not columns:
            return None
        if len(columns) > 1:
            raise CompositePrimaryKeyError(table_name, columns)
        return columns[0]

    def get_raw_columns(self, table_name: str) -> List[Dict[str, Any]]:
        """Column metadata in engine order, with the native type normalized."""
        self._ensure_table(table_name)
        try:
            reflected = self.inspector.get_columns(table_name, schema=self.schema)
        except NoSuchTableError:
            raise QueryServiceError(
                QueryServiceError.TABLE_NOT_FOUND_ERROR,
                f"Table {table_name} does not exist.",
            )

        primary_keys = set(self.get_primary_key_columns(table_name))
        columns = []
        for column in reflected:
            data_type = self.sql_client.compile_type(column["type"])
            default = column.get("default")
            columns.append(
                {
                    "name": column["name"],
                    "table": table_name,
                    "type": self.sql_client.normalize_native_type(data_type),
                    "data_type": data_type,
                    "nullable": bool(column.get("nullable", True)),
                    "default": str(default) if default is not None else None,
                    "autoincrement": column.get("autoincrement"),
                    "comment": column.get("comment"),
                    "max_length": getattr(column["type"], "length", None),
                    "is_primary_key": column["name"] in primary_keys,
                }
            )
        return columns

    def get_foreign_keys(self, table_name: str) -> List[ForeignKeyInfo]:
        """One entry per constrained column of every foreign key the table owns."""
        self._ensure_table(table_name)
        foreign_keys = []
        for fk in self.inspector.get_foreign_keys(table_name, schema=self.schema):
            options = fk.get("options") or {}
            referred_columns = fk.get("referred_columns") or []
            for index, column_name in enumerate(fk.get("constrained_columns") or []):
                foreign_keys.append(
                    ForeignKeyInfo(
                        constraint_name=fk.get("name"),
                        table_name=table_name,
                        column_name=column_name,
                        foreign_table_name=fk["referred_table"],
                        foreign_column_name=referred_columns[index]
                        if index < len(referred_columns)
                        else None,
                        foreign_table_schema=fk.get("referred_schema"),
                        on_update=options.get("onupdate"),
                        on_delete=options.get("ondelete"),
                    )
                )

        logger.debug(f"Found {len(foreign_keys)} foreign keys on {table_name}")
        return foreign_keys
