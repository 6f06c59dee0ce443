"""
Error codes for the datasource-sdk.

This module defines standardized error codes used throughout the datasource-sdk.
Error codes follow the format: DataSource-{Component}-{HTTP_Code}-{Unique_ID}

Components:
- Client: Connection provider errors
- QueryService: Schema inspection, field inference and record operation errors
- Common: Common utility errors
"""

from enum import Enum
from typing import Dict, Optional


class ErrorComponent(Enum):
    """Components that can generate errors in the system."""

    CLIENT = "Client"
    QUERY_SERVICE = "QueryService"
    COMMON = "Common"


class ErrorCode:
    """Error code with component, HTTP code, and description."""

    def __init__(
        self, component: str, http_code: str, unique_id: str, description: str
    ):
        self.code = f"DataSource-{component}-{http_code}-{unique_id}"
        self.http_code = int(http_code)
        self.description = description

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


# Client Errors
CLIENT_ERRORS = {
    "SQL_CLIENT_CREDENTIALS_ERROR": ErrorCode(
        ErrorComponent.CLIENT.value, "400", "00", "SQL client credentials are missing or malformed"
    ),
    "SQL_CLIENT_CONNECTION_ERROR": ErrorCode(
        ErrorComponent.CLIENT.value, "503", "00", "SQL client connection error"
    ),
    "SQL_CLIENT_NOT_CONNECTED_ERROR": ErrorCode(
        ErrorComponent.CLIENT.value, "500", "00", "Connection is not established"
    ),
    "UNSUPPORTED_DATA_SOURCE_ERROR": ErrorCode(
        ErrorComponent.CLIENT.value, "400", "01", "Unsupported data source type"
    ),
}

# Query Service Errors
QUERY_SERVICE_ERRORS = {
    "TABLE_NOT_FOUND_ERROR": ErrorCode(ErrorComponent.QUERY_SERVICE.value, "404", "00", "Table not found"),
    "MISSING_PRIMARY_KEY_ERROR": ErrorCode(
        ErrorComponent.QUERY_SERVICE.value, "500", "00", "Primary key not found"
    ),
    "COMPOSITE_PRIMARY_KEY_ERROR": ErrorCode(
        ErrorComponent.QUERY_SERVICE.value, "500", "01", "Composite primary keys are not supported"
    ),
    "READ_ONLY_DATA_SOURCE_ERROR": ErrorCode(
        ErrorComponent.QUERY_SERVICE.value, "403", "00", "Data source is read only"
    ),
    "QUERY_EXECUTION_ERROR": ErrorCode(
        ErrorComponent.QUERY_SERVICE.value, "500", "02", "Query execution error"
    ),
    "DATA_SOURCE_VALIDATION_ERROR": ErrorCode(
        ErrorComponent.QUERY_SERVICE.value, "422", "00", "Data source validation error"
    ),
}

# Common Utility Errors
COMMON_ERRORS = {
    "CREDENTIALS_DECRYPT_ERROR": ErrorCode(
        ErrorComponent.COMMON.value, "500", "00", "Credentials decrypt error"
    ),
}

# Combined dictionary of all error codes
ERROR_CODES: Dict[str, ErrorCode] = {
    **CLIENT_ERRORS,
    **QUERY_SERVICE_ERRORS,
    **COMMON_ERRORS,
}


class DataSourceSDKError(Exception):
    """Base exception carrying an ErrorCode.

    Attributes:
        error_code: The ErrorCode describing the failure.
        message: Human-readable detail, defaults to the error code description.
    """

    def __init__(self, error_code: ErrorCode, message: Optional[str] = None):
        self.error_code = error_code
        self.message = message or error_code.description
        super().__init__(f"{error_code.code}: {self.message}")

    @property
    def http_code(self) -> int:
        return self.error_code.http_code


class ClientError(DataSourceSDKError):
    """Errors raised by the connection providers."""

    SQL_CLIENT_CREDENTIALS_ERROR = CLIENT_ERRORS["SQL_CLIENT_CREDENTIALS_ERROR"]
    SQL_CLIENT_CONNECTION_ERROR = CLIENT_ERRORS["SQL_CLIENT_CONNECTION_ERROR"]
    SQL_CLIENT_NOT_CONNECTED_ERROR = CLIENT_ERRORS["SQL_CLIENT_NOT_CONNECTED_ERROR"]
    UNSUPPORTED_DATA_SOURCE_ERROR = CLIENT_ERRORS["UNSUPPORTED_DATA_SOURCE_ERROR"]


class QueryServiceError(DataSourceSDKError):
    """Errors raised by the query service layer."""

    TABLE_NOT_FOUND_ERROR = QUERY_SERVICE_ERRORS["TABLE_NOT_FOUND_ERROR"]
    MISSING_PRIMARY_KEY_ERROR = QUERY_SERVICE_ERRORS["MISSING_PRIMARY_KEY_ERROR"]
    COMPOSITE_PRIMARY_KEY_ERROR = QUERY_SERVICE_ERRORS["COMPOSITE_PRIMARY_KEY_ERROR"]
    READ_ONLY_DATA_SOURCE_ERROR = QUERY_SERVICE_ERRORS["READ_ONLY_DATA_SOURCE_ERROR"]
    QUERY_EXECUTION_ERROR = QUERY_SERVICE_ERRORS["QUERY_EXECUTION_ERROR"]
    DATA_SOURCE_VALIDATION_ERROR = QUERY_SERVICE_ERRORS["DATA_SOURCE_VALIDATION_ERROR"]


class MissingPrimaryKeyError(QueryServiceError):
    """Raised when a record operation needs a primary key the table does not have."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(
            QueryServiceError.MISSING_PRIMARY_KEY_ERROR,
            f"Can't find a primary key for table {table_name}.",
        )


class CompositePrimaryKeyError(QueryServiceError):
    """Raised when a table's primary key spans more than one column."""

    def __init__(self, table_name: str, columns: list):
        self.table_name = table_name
        self.columns = list(columns)
        super().__init__(
            QueryServiceError.COMPOSITE_PRIMARY_KEY_ERROR,
            f"Table {table_name} has a composite primary key ({', '.join(self.columns)}).",
        )


class ReadOnlyDataSourceError(QueryServiceError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            QueryServiceError.READ_ONLY_DATA_SOURCE_ERROR,
            f"Can't {operation} on a read only data source.",
        )


class CommonError(DataSourceSDKError):
    """Errors raised by the common utilities."""

    CREDENTIALS_DECRYPT_ERROR = COMMON_ERRORS["CREDENTIALS_DECRYPT_ERROR"]
