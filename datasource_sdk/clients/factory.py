"""Factory for creating SQL clients from a data source type."""

from typing import Any, Dict, Type, Union

from datasource_sdk.clients.mysql import MySQLClient
from datasource_sdk.clients.postgresql import PostgreSQLClient
from datasource_sdk.clients.sql import BaseSQLClient
from datasource_sdk.clients.sqlite import SQLiteClient
from datasource_sdk.common.error_codes import ClientError
from datasource_sdk.dto.data_source import DataSourceType


class SQLClientFactory:
    """Factory for creating SQL clients based on the data source type."""

    _clients: Dict[DataSourceType, Type[BaseSQLClient]] = {
        DataSourceType.POSTGRESQL: PostgreSQLClient,
        DataSourceType.MYSQL: MySQLClient,
        DataSourceType.SQLITE: SQLiteClient,
    }

    @classmethod
    def register_client(
        cls, data_source_type: DataSourceType, client_class: Type[BaseSQLClient]
    ):
        """
        Register a new SQL client.

        Args:
            data_source_type (DataSourceType): The data source type identifier.
            client_class (Type[BaseSQLClient]): The client class to register.
        """
        cls._clients[DataSourceType(data_source_type)] = client_class

    @classmethod
    def get_client_class(
        cls, data_source_type: Union[DataSourceType, str]
    ) -> Type[BaseSQLClient]:
        """
        Get the client class for a data source type.

        Raises:
            ClientError: If the data source type is not supported.
        """
        try:
            client_class = cls._clients.get(DataSourceType(data_source_type))
        except ValueError:
            client_class = None
        if not client_class:
            raise ClientError(
                ClientError.UNSUPPORTED_DATA_SOURCE_ERROR,
                f"Unsupported data source type: {data_source_type}",
            )

        return client_class

    @classmethod
    def create_client(
        cls, data_source_type: Union[DataSourceType, str], **kwargs: Any
    ) -> BaseSQLClient:
        return cls.get_client_class(data_source_type)(**kwargs)
