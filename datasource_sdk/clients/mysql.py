from datasource_sdk.clients.sql import BaseSQLClient
from datasource_sdk.dto.columns import FieldType
from datasource_sdk.dto.data_source import DataSourceType


class MySQLClient(BaseSQLClient):
    DATA_SOURCE_TYPE = DataSourceType.MYSQL

    DB_CONFIG = {
        "drivername": "mysql+pymysql",
        "template": "mysql+pymysql://{user}:{password}@{host}:{port}/{database}",
        "required": ["user", "host", "port", "database"],
        "defaults": {"connect_timeout": 10},
    }

    FIELD_TYPE_MAP = {
        "char": FieldType.TEXT,
        "varchar": FieldType.TEXT,
        "binary": FieldType.TEXT,
        "varbinary": FieldType.TEXT,
        "tinyblob": FieldType.TEXT,
        "tinytext": FieldType.TEXT,
        "set": FieldType.TEXT,
        "enum": FieldType.SELECT,
        "tinyint": FieldType.BOOLEAN,
        "bit": FieldType.BOOLEAN,
        "boolean": FieldType.BOOLEAN,
        "date": FieldType.DATETIME,
        "datetime": FieldType.DATETIME,
        "timestamp": FieldType.DATETIME,
        "time": FieldType.DATETIME,
        "year": FieldType.DATETIME,
        "json": FieldType.JSON,
        "blob": FieldType.TEXTAREA,
        "text": FieldType.TEXTAREA,
        "mediumblob": FieldType.TEXTAREA,
        "mediumtext": FieldType.TEXTAREA,
        "longblob": FieldType.TEXTAREA,
        "longtext": FieldType.TEXTAREA,
        "int": FieldType.NUMBER,
        "integer": FieldType.NUMBER,
        "smallint": FieldType.NUMBER,
        "mediumint": FieldType.NUMBER,
        "bigint": FieldType.NUMBER,
        "float": FieldType.NUMBER,
        "double": FieldType.NUMBER,
        "decimal": FieldType.NUMBER,
        "numeric": FieldType.NUMBER,
        "real": FieldType.NUMBER,
    }
