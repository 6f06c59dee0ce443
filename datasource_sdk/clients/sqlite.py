from datasource_sdk.clients.sql import BaseSQLClient
from datasource_sdk.dto.columns import FieldType
from datasource_sdk.dto.data_source import DataSourceType


class SQLiteClient(BaseSQLClient):
    """SQLite databases, mostly used for local development and tests."""

    DATA_SOURCE_TYPE = DataSourceType.SQLITE

    DB_CONFIG = {
        "drivername": "sqlite",
        "template": "sqlite:///{database}",
        "required": ["database"],
    }

    FIELD_TYPE_MAP = {
        "varchar": FieldType.TEXT,
        "char": FieldType.TEXT,
        "nvarchar": FieldType.TEXT,
        "clob": FieldType.TEXT,
        "boolean": FieldType.BOOLEAN,
        "date": FieldType.DATETIME,
        "datetime": FieldType.DATETIME,
        "timestamp": FieldType.DATETIME,
        "time": FieldType.DATETIME,
        "json": FieldType.JSON,
        "text": FieldType.TEXTAREA,
        "blob": FieldType.TEXTAREA,
        "integer": FieldType.NUMBER,
        "int": FieldType.NUMBER,
        "bigint": FieldType.NUMBER,
        "smallint": FieldType.NUMBER,
        "real": FieldType.NUMBER,
        "float": FieldType.NUMBER,
        "double": FieldType.NUMBER,
        "numeric": FieldType.NUMBER,
        "decimal": FieldType.NUMBER,
    }
