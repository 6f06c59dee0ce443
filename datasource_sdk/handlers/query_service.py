import json
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import Executable, Result, delete, insert, text, update
from sqlalchemy.exc import SQLAlchemyError

from datasource_sdk.clients.factory import SQLClientFactory
from datasource_sdk.clients.sql import BaseSQLClient
from datasource_sdk.common.crypto import FernetDecryptor
from datasource_sdk.common.error_codes import (
    MissingPrimaryKeyError,
    QueryServiceError,
    ReadOnlyDataSourceError,
)
from datasource_sdk.config import get_settings
from datasource_sdk.credentials.models import DataSourceCredentials
from datasource_sdk.credentials.store import Decrypt, parse_credentials
from datasource_sdk.dto.columns import Column, TableInfo
from datasource_sdk.dto.data_source import DataSource
from datasource_sdk.dto.query import RecordsQuery
from datasource_sdk.fields.inference import StoredColumns, build_columns
from datasource_sdk.fields.registry import FieldOptionsRegistry, default_registry
from datasource_sdk.handlers import HandlerInterface
from datasource_sdk.inspector.schema import SchemaInspector
from datasource_sdk.observability.logger_adaptor import get_logger
from datasource_sdk.query.filters import (
    FilterLike,
    build_count_query,
    build_primary_key_clause,
    build_primary_keys_clause,
    build_query,
    build_record_query,
    get_table,
    is_number,
)

logger = get_logger(__name__)


class QueryService(HandlerInterface):
    """
    Generic CRUD, filtering and schema introspection over the tables of one
    data source.

    A query service lives for one request: connect, run operations
    sequentially against the same connection, disconnect. Used as an async
    context manager the connection is released on every exit path::

        async with QueryService(data_source, decrypt=decrypt) as service:
            columns = await service.get_columns("users", stored_columns)
            rows = await service.get_records("users", filters=filters, limit=24, offset=0)
    """

    test_authentication_sql: str = "SELECT 1"

    def __init__(
        self,
        data_source: DataSource,
        decrypt: Optional[Decrypt] = None,
        sql_client: Optional[BaseSQLClient] = None,
        field_options_registry: FieldOptionsRegistry = default_registry,
        logger: Any = logger,
        schema: Optional[str] = None,
    ):
        """
        Args:
            data_source: The data source to query.
            decrypt: Turns the encrypted credential blob into its JSON plaintext.
                Defaults to a FernetDecryptor using the configured secret key.
            sql_client: Engine client; picked from the data source type when omitted.
            field_options_registry: Default field options per field type.
            logger: Logger sink, defaults to the module logger.
            schema: Database schema holding the tables, engine default when omitted.
        """
        self.data_source = data_source
        self.decrypt = decrypt
        self.field_options_registry = field_options_registry
        self.logger = logger
        self.schema = schema
        self.sql_client = sql_client or SQLClientFactory.create_client(
            data_source.type,
            read_only=bool(data_source.options.get("readOnly", False)) or None,
        )
        self.inspector: Optional[SchemaInspector] = None

    def get_parsed_credentials(self) -> DataSourceCredentials:
        decrypt = self.decrypt or FernetDecryptor()
        return parse_credentials(self.data_source, decrypt)

    async def load(self, credentials: Optional[Dict[str, Any]] = None) -> None:
        """
        Open the client with the given credentials, or with the data source's
        decrypted credentials when none are given.
        """
        if credentials is None:
            credentials = self.get_parsed_credentials()
        await self.sql_client.load(credentials)
        self.inspector = SchemaInspector(self.sql_client, schema=self.schema)

    async def connect(self) -> "QueryService":
        if self.inspector is None:
            await self.load()
            await self.sql_client.connect()
        return self

    async def disconnect(self) -> "QueryService":
        await self.sql_client.close()
        self.inspector = None
        return self

    async def __aenter__(self) -> "QueryService":
        return await self.connect()

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.disconnect()

    def _get_inspector(self) -> SchemaInspector:
        if self.inspector is None:
            # Surfaces the client's "not connected" error
            self.sql_client.get_connection()
            self.inspector = SchemaInspector(self.sql_client, schema=self.schema)
        return self.inspector

    def _run_statement(
        self,
        statement: Executable,
        handler: Callable[[Result], Any],
        commit: bool = False,
    ) -> Any:
        try:
            result = self.sql_client.execute(statement)
            value = handler(result)
            if commit:
                self.sql_client.commit()
            return value
        except SQLAlchemyError as e:
            self.sql_client.rollback()
            raise QueryServiceError(QueryServiceError.QUERY_EXECUTION_ERROR, str(e))

    async def _execute(
        self,
        statement: Executable,
        handler: Callable[[Result], Any],
        commit: bool = False,
    ) -> Any:
        """Execute a statement and read its result on the client's worker thread."""
        return await self.sql_client.run_sync(
            self._run_statement, statement, handler, commit
        )

    async def _inspect(self, method: str, *args: Any) -> Any:
        inspector = self._get_inspector()
        return await self.sql_client.run_sync(getattr(inspector, method), *args)

    async def _require_primary_key(self, table_name: str) -> str:
        primary_key = await self._inspect("get_primary_key_column", table_name)
        if not primary_key:
            self.logger.error(f"Can't find a primary key for table {table_name}.")
            raise MissingPrimaryKeyError(table_name)
        return primary_key

    def _ensure_writable(self, operation: str) -> None:
        if self.sql_client.read_only:
            raise ReadOnlyDataSourceError(operation)

    def get_data_source_info(self) -> Dict[str, Any]:
        return {
            "type": self.data_source.type.value,
            "read_only": self.sql_client.read_only,
        }

    async def test_auth(self) -> bool:
        """
        Run a trivial query to check the credentials.

        :return: True if the credentials are valid.
        :raises QueryServiceError: If the query fails.
        """
        await self._execute(text(self.test_authentication_sql), Result.fetchall)
        return True

    async def fetch_metadata(self) -> List[Dict[str, Any]]:
        return [table.model_dump(by_alias=True) for table in await self.get_tables()]

    async def get_tables(self) -> List[TableInfo]:
        return await self._inspect("get_tables")

    async def get_primary_key_column(self, table_name: str) -> Optional[str]:
        return await self._inspect("get_primary_key_column", table_name)

    async def get_columns(
        self, table_name: str, stored_columns: Optional[StoredColumns] = None
    ) -> List[Column]:
        """
        Column model of a table: live schema decorated with inferred field
        types, default options and the stored configuration.
        """
        raw_columns = await self._inspect("get_raw_columns", table_name)
        primary_keys = await self._inspect("get_primary_key_columns", table_name)
        foreign_keys = await self._inspect("get_foreign_keys", table_name)

        return await build_columns(
            raw_columns,
            primary_keys,
            foreign_keys,
            self.sql_client.infer_field_type_from_native,
            stored_columns=stored_columns,
            registry=self.field_options_registry,
            log=self.logger,
        )

    async def get_records(
        self,
        table_name: str,
        filters: Optional[Sequence[FilterLike]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Optional[str] = None,
        order_direction: Optional[str] = None,
        select: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Rows of a table.

        ``limit``, ``offset`` and ``select`` are only honoured together: a
        request missing either bound returns every column of every matching row.
        """
        if is_number(limit):
            limit = min(limit, get_settings().max_page_size)

        query = RecordsQuery(
            filters=list(filters or []),
            limit=limit,
            offset=offset,
            order_by=order_by,
            order_direction=order_direction,
            select=list(select or []),
        )
        statement = build_query(table_name, query, schema=self.schema)

        return await self._execute(
            statement, lambda result: [dict(row._mapping) for row in result]
        )

    async def get_records_count(
        self, table_name: str, filters: Optional[Sequence[FilterLike]] = None
    ) -> int:
        """
        Number of rows in a table.

        Filters are ignored unless passed explicitly, so the default total
        doesn't follow the filters given to get_records.
        """
        statement = build_count_query(
            table_name, list(filters) if filters else None, schema=self.schema
        )
        count = await self._execute(statement, Result.scalar_one)

        return int(count)

    async def get_record(
        self,
        table_name: str,
        record_id: Any,
        select: Optional[List[str]] = None,
    ) -> Optional[Dict[str, Any]]:
        primary_key = await self._require_primary_key(table_name)

        statement = build_record_query(
            table_name, primary_key, record_id, columns=select, schema=self.schema
        )
        row = await self._execute(statement, Result.first)

        return dict(row._mapping) if row is not None else None

    async def create_record(self, table_name: str, data: Dict[str, Any]) -> Any:
        """
        Insert a row.

        Returns:
            The primary key value of the new row.
        """
        self._ensure_writable("create a record")
        primary_key = await self._require_primary_key(table_name)
        data = self._prepare_data(data)

        table = get_table(
            table_name, *dict.fromkeys([*data, primary_key]), schema=self.schema
        )
        statement = insert(table).values(data)

        if self.sql_client.supports_returning:
            record_id = await self._execute(
                statement.returning(table.c[primary_key]),
                Result.scalar_one,
                commit=True,
            )
        else:
            last_row_id = await self._execute(
                statement, lambda result: result.lastrowid, commit=True
            )
            record_id = (
                data[primary_key]
                if data.get(primary_key) is not None
                else last_row_id
            )

        self.logger.debug(f"Created record {record_id} in {table_name}")
        return record_id

    async def update_record(
        self, table_name: str, record_id: Any, data: Dict[str, Any]
    ) -> int:
        """
        Returns:
            int: Number of updated rows.
        """
        self._ensure_writable("update a record")
        primary_key = await self._require_primary_key(table_name)
        data = self._prepare_data(data)
        if not data:
            return 0

        statement = (
            update(get_table(table_name, *data, schema=self.schema))
            .where(build_primary_key_clause(primary_key, record_id))
            .values(data)
        )

        return await self._execute(statement, _rowcount, commit=True)

    async def delete_record(self, table_name: str, record_id: Any) -> int:
        self._ensure_writable("delete a record")
        primary_key = await self._require_primary_key(table_name)

        statement = delete(get_table(table_name, schema=self.schema)).where(
            build_primary_key_clause(primary_key, record_id)
        )

        return await self._execute(statement, _rowcount, commit=True)

    async def delete_records(self, table_name: str, record_ids: Iterable[Any]) -> int:
        """Delete every row whose primary key is in ``record_ids`` with one statement."""
        self._ensure_writable("delete records")
        primary_key = await self._require_primary_key(table_name)
        record_ids = list(record_ids)
        if not record_ids:
            return 0

        statement = delete(get_table(table_name, schema=self.schema)).where(
            build_primary_keys_clause(primary_key, record_ids)
        )

        return await self._execute(statement, _rowcount, commit=True)

    @staticmethod
    def _prepare_data(data: Dict[str, Any]) -> Dict[str, Any]:
        # Drivers can't bind dicts and lists, store them as JSON text
        return {
            key: json.dumps(value) if isinstance(value, (dict, list)) else value
            for key, value in (data or {}).items()
        }


def _rowcount(result: Result) -> int:
    return result.rowcount
