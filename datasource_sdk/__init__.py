from datasource_sdk.dto.columns import Column, FieldType
from datasource_sdk.dto.data_source import DataSource, DataSourceType
from datasource_sdk.handlers.query_service import QueryService

__version__ = "0.1.0"

__all__ = ["Column", "DataSource", "DataSourceType", "FieldType", "QueryService"]
