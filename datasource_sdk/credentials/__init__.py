from datasource_sdk.credentials.exceptions import (
    CredentialError,
    CredentialNotFoundError,
    CredentialParseError,
    CredentialValidationError,
)
from datasource_sdk.credentials.models import (
    DataSourceCredentials,
    MysqlCredentials,
    PostgresqlCredentials,
    SqliteCredentials,
)
from datasource_sdk.credentials.store import parse_credentials

__all__ = [
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialParseError",
    "CredentialValidationError",
    "DataSourceCredentials",
    "MysqlCredentials",
    "PostgresqlCredentials",
    "SqliteCredentials",
    "parse_credentials",
]
