from datasource_sdk.clients.sql import BaseSQLClient
from datasource_sdk.dto.columns import FieldType
from datasource_sdk.dto.data_source import DataSourceType


class PostgreSQLClient(BaseSQLClient):
    DATA_SOURCE_TYPE = DataSourceType.POSTGRESQL

    DB_CONFIG = {
        "drivername": "postgresql+psycopg2",
        "template": "postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}",
        "required": ["user", "host", "port", "database"],
        "defaults": {"connect_timeout": 10},
    }

    FIELD_TYPE_MAP = {
        # information_schema names and their SQLAlchemy compiled spellings
        "character": FieldType.TEXT,
        "char": FieldType.TEXT,
        "bpchar": FieldType.TEXT,
        "character varying": FieldType.TEXT,
        "varchar": FieldType.TEXT,
        "interval": FieldType.TEXT,
        "name": FieldType.TEXT,
        "citext": FieldType.TEXT,
        "boolean": FieldType.BOOLEAN,
        "bit": FieldType.BOOLEAN,
        "timestamp without time zone": FieldType.DATETIME,
        "timestamp with time zone": FieldType.DATETIME,
        "timestamp": FieldType.DATETIME,
        "time without time zone": FieldType.DATETIME,
        "time with time zone": FieldType.DATETIME,
        "time": FieldType.DATETIME,
        "date": FieldType.DATETIME,
        "json": FieldType.JSON,
        "jsonb": FieldType.JSON,
        "text": FieldType.TEXTAREA,
        "xml": FieldType.TEXTAREA,
        "bytea": FieldType.TEXTAREA,
        "integer": FieldType.NUMBER,
        "bigint": FieldType.NUMBER,
        "numeric": FieldType.NUMBER,
        "smallint": FieldType.NUMBER,
        "oid": FieldType.NUMBER,
        "uuid": FieldType.NUMBER,
        "real": FieldType.NUMBER,
        "double precision": FieldType.NUMBER,
        "money": FieldType.NUMBER,
    }
