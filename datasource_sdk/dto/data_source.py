from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from datasource_sdk.common.error_codes import QueryServiceError


class DataSourceType(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    SQLITE = "sqlite"


# Engines whose options must carry a connection url
URL_BASED_TYPES = {DataSourceType.POSTGRESQL}


class DataSource(BaseModel):
    """A stored data source definition. Credentials stay encrypted."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[Union[int, str]] = None
    name: str
    type: DataSourceType
    encrypted_credentials: Optional[str] = Field(
        default=None, alias="encryptedCredentials"
    )
    options: Dict[str, Any] = Field(default_factory=dict)


class DataSourceOptions(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: Optional[str] = None


class DataSourceCreate(BaseModel):
    """Validation schema for a new data source definition."""

    name: str = Field(min_length=3)
    type: DataSourceType
    options: Optional[DataSourceOptions] = None

    @model_validator(mode="after")
    def check_url(self) -> "DataSourceCreate":
        if self.type in URL_BASED_TYPES and self.options is not None:
            if not self.options.url:
                raise ValueError(f"options.url is required for {self.type.value}")
        return self


def validate_data_source(payload: Dict[str, Any]) -> DataSourceCreate:
    """
    Validate a new data source payload.

    Raises:
        QueryServiceError: DATA_SOURCE_VALIDATION_ERROR with the pydantic messages.
    """
    try:
        return DataSourceCreate.model_validate(payload)
    except ValidationError as e:
        messages = [
            f"{'.'.join(str(loc) for loc in error['loc']) or 'payload'}: {error['msg']}"
            for error in e.errors()
        ]
        raise QueryServiceError(
            QueryServiceError.DATA_SOURCE_VALIDATION_ERROR, "; ".join(messages)
        )
