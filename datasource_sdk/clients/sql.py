"""
SQL client implementation for data source connections.

This module provides the base SQL client shared by every supported engine. A
subclass describes its engine through class attributes: how to build the
connection string (DB_CONFIG) and how its native column types map to field
types (FIELD_TYPE_MAP).
"""

import asyncio
import functools
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, TypeVar, Union
from urllib.parse import quote_plus

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine, Result, make_url
from sqlalchemy.exc import ArgumentError, CompileError, SQLAlchemyError

from datasource_sdk.clients import ClientInterface
from datasource_sdk.common.error_codes import ClientError
from datasource_sdk.config import get_settings
from datasource_sdk.constants import SQL_POOL_PRE_PING
from datasource_sdk.credentials.models import BaseCredentials
from datasource_sdk.dto.columns import FieldType
from datasource_sdk.dto.data_source import DataSourceType
from datasource_sdk.fields.inference import infer_field_type
from datasource_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_TYPE_ARGUMENTS = re.compile(r"\([^)]*\)")
_TYPE_MODIFIERS = re.compile(r"\b(unsigned|zerofill)\b")


class BaseSQLClient(ClientInterface):
    """SQL client for data source operations.

    Attributes:
        connection: Database connection instance.
        engine: SQLAlchemy engine instance.
        sql_alchemy_connect_args (Dict[str, Any]): Additional connection arguments.
        credentials (Dict[str, Any]): Database credentials.
        read_only (bool): Whether mutations are refused for this data source.
        DB_CONFIG (Dict[str, Any]): Connection string template of the engine.
        FIELD_TYPE_MAP (Dict[str, FieldType]): Native type -> field type table.
    """

    DATA_SOURCE_TYPE: Optional[DataSourceType] = None
    DB_CONFIG: Dict[str, Any] = {}
    FIELD_TYPE_MAP: Dict[str, FieldType] = {}

    connection: Optional[Connection] = None
    engine: Optional[Engine] = None
    read_only: bool = False

    def __init__(
        self,
        credentials: Optional[Dict[str, Any]] = None,
        sql_alchemy_connect_args: Optional[Dict[str, Any]] = None,
        read_only: Optional[bool] = None,
    ):
        """
        Initialize the SQL client.

        Args:
            credentials (Dict[str, Any], optional): Database credentials. Defaults to {}.
            sql_alchemy_connect_args (Dict[str, Any], optional): Additional SQLAlchemy
                connection arguments. Defaults to {}.
            read_only (bool, optional): Overrides the engine's read_only flag.
        """
        super().__init__()
        self.credentials = credentials or {}
        self.sql_alchemy_connect_args = sql_alchemy_connect_args or {}
        self._executor: Optional[ThreadPoolExecutor] = None
        self.connection = None
        self.engine = None
        if read_only is not None:
            self.read_only = read_only

    async def load(self, credentials: Union[Dict[str, Any], BaseCredentials]) -> None:
        """Create the engine and open the connection.

        Args:
            credentials: Database connection credentials.

        Raises:
            ClientError: If the credentials are malformed or the connection fails.
        """
        if isinstance(credentials, BaseCredentials):
            credentials = credentials.to_dict()
        self.credentials = credentials or {}

        connection_string = self.get_sqlalchemy_connection_string()
        try:
            self.engine = create_engine(
                connection_string,
                connect_args=self.sql_alchemy_connect_args,
                pool_pre_ping=SQL_POOL_PRE_PING,
            )
            self.connection = await self.run_sync(self.engine.connect)
        except (SQLAlchemyError, ArgumentError) as e:
            logger.error(f"Error loading SQL client: {str(e)}")
            if self.engine:
                self.engine.dispose()
                self.engine = None
            self._shutdown_executor()
            raise ClientError(ClientError.SQL_CLIENT_CONNECTION_ERROR, str(e))

        logger.info(
            f"Connected to {self.engine.dialect.name} data source",
            read_only=self.read_only,
        )

    async def connect(self) -> "BaseSQLClient":
        # Pooled engines connect lazily in load(), nothing to do here
        return self

    async def close(self) -> None:
        """Close the connection and release the engine's pool."""
        if self.connection is not None:
            await self.run_sync(self.connection.close)
            self.connection = None
        if self.engine is not None:
            await self.run_sync(self.engine.dispose)
            self.engine = None
            logger.info("SQL client connection released")
        self._shutdown_executor()

    async def disconnect(self) -> "BaseSQLClient":
        await self.close()
        return self

    async def run_sync(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a blocking call on the client's worker thread.

        The connection is only ever touched from that worker thread.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="datasource-sdk-sql"
            )
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, functools.partial(fn, *args, **kwargs)
        )

    def _shutdown_executor(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def get_sqlalchemy_connection_string(self) -> str:
        """
        Get the SQLAlchemy connection string for database connection.

        A ``url`` in the credentials wins; its driver is set to the engine's
        driver when the url names only the dialect (``postgresql://``).
        Otherwise the connection string is built from DB_CONFIG:

        {
            "drivername": "postgresql+psycopg2",
            "template": "postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}",
            "required": ["user", "host", "port", "database"],
            "defaults": {"connect_timeout": 10}
        }

        Returns:
            str: The complete SQLAlchemy connection string.

        Raises:
            ClientError: If required credentials are missing.
        """
        if not self.credentials:
            raise ClientError(
                ClientError.SQL_CLIENT_CREDENTIALS_ERROR, "No credentials on record."
            )

        url = self.credentials.get("url")
        if url:
            return self._with_driver(url)

        missing = [
            param
            for param in self.DB_CONFIG.get("required", [])
            if self.credentials.get(param) in (None, "")
        ]
        if missing:
            raise ClientError(
                ClientError.SQL_CLIENT_CREDENTIALS_ERROR,
                f"Missing credentials: {', '.join(missing)}",
            )

        param_values = {
            key: quote_plus(str(value)) if key in ("user", "password") else value
            for key, value in self.credentials.items()
            if value is not None
        }
        param_values.setdefault("password", "")
        conn_str = self.DB_CONFIG["template"].format(**param_values)

        defaults = self.get_default_connection_params()
        if defaults:
            conn_str = self.add_connection_params(conn_str, defaults)

        return conn_str

    def get_default_connection_params(self) -> Dict[str, Any]:
        params = dict(self.DB_CONFIG.get("defaults", {}))
        if "connect_timeout" in params:
            params["connect_timeout"] = get_settings().connect_timeout
        return params

    def add_connection_params(
        self, connection_string: str, source_connection_params: Dict[str, Any]
    ) -> str:
        """
        Add the source connection params to the connection string.
        """
        for key, value in source_connection_params.items():
            if "?" not in connection_string:
                connection_string += "?"
            else:
                connection_string += "&"
            connection_string += f"{key}={value}"

        return connection_string

    def _with_driver(self, url: str) -> str:
        drivername = self.DB_CONFIG.get("drivername")
        try:
            parsed = make_url(url)
        except ArgumentError as e:
            raise ClientError(ClientError.SQL_CLIENT_CREDENTIALS_ERROR, str(e))
        if drivername and "+" not in parsed.drivername:
            parsed = parsed.set(drivername=drivername)
        return parsed.render_as_string(hide_password=False)

    def get_connection(self) -> Connection:
        """
        Returns:
            Connection: The open connection.

        Raises:
            ClientError: If load() wasn't called or the client was closed.
        """
        if self.connection is None:
            raise ClientError(ClientError.SQL_CLIENT_NOT_CONNECTED_ERROR)
        return self.connection

    def execute(self, statement: Any) -> Result:
        """Execute a SQLAlchemy statement on the open connection."""
        connection = self.get_connection()
        logger.debug(f"Running query: {statement}")
        try:
            return connection.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Error running query: {str(e)}")
            raise

    def commit(self) -> None:
        self.get_connection().commit()

    def rollback(self) -> None:
        if self.connection is not None:
            self.connection.rollback()

    @property
    def dialect(self):
        return self.get_connection().dialect

    @property
    def supports_returning(self) -> bool:
        return bool(getattr(self.dialect, "insert_returning", False))

    @staticmethod
    def normalize_native_type(native_type: Optional[str]) -> str:
        """
        Reduce a dialect type string to the bare native type name.

        ``"VARCHAR(255)"`` -> ``"varchar"``, ``"INTEGER UNSIGNED"`` -> ``"integer"``,
        ``"TIMESTAMP WITHOUT TIME ZONE"`` -> ``"timestamp without time zone"``.
        """
        if not native_type:
            return ""
        normalized = _TYPE_ARGUMENTS.sub("", str(native_type).lower())
        normalized = _TYPE_MODIFIERS.sub("", normalized)
        return " ".join(normalized.split())

    def compile_type(self, sa_type: Any) -> str:
        """Render a reflected SQLAlchemy type with the connected dialect."""
        try:
            return sa_type.compile(dialect=self.dialect)
        except CompileError:
            # Reflection can yield NullType or dialect-foreign types that refuse to compile
            return str(sa_type)

    def infer_field_type_from_native(
        self, native_type: str, column_name: str
    ) -> FieldType:
        return infer_field_type(
            self.normalize_native_type(native_type),
            False,
            column_name,
            self.FIELD_TYPE_MAP,
        )
