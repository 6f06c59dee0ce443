"""Turn the encrypted credential blob of a data source into typed credentials."""

import json
from typing import Callable, Optional

from pydantic import ValidationError

from datasource_sdk.credentials.exceptions import (
    CredentialNotFoundError,
    CredentialParseError,
    CredentialValidationError,
)
from datasource_sdk.credentials.models import CREDENTIALS_BY_TYPE, DataSourceCredentials
from datasource_sdk.dto.data_source import DataSource
from datasource_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

Decrypt = Callable[[str], Optional[str]]


def parse_credentials(
    data_source: Optional[DataSource], decrypt: Decrypt
) -> DataSourceCredentials:
    """
    Decrypt and parse the credentials of a data source.

    Args:
        data_source: The data source holding the encrypted credentials.
        decrypt: Callable returning the plaintext JSON for an encrypted blob.

    Returns:
        DataSourceCredentials: The credential variant matching ``data_source.type``.

    Raises:
        CredentialNotFoundError: No data source, no blob, or an empty plaintext.
        CredentialParseError: The plaintext isn't JSON.
        CredentialValidationError: The JSON doesn't fit the engine's credential shape.
    """
    if not data_source or not data_source.encrypted_credentials:
        raise CredentialNotFoundError("No data source provided.")

    credentials_as_a_string = decrypt(data_source.encrypted_credentials)

    if not credentials_as_a_string:
        raise CredentialNotFoundError("No credentials on record.")

    try:
        raw = json.loads(credentials_as_a_string)
    except json.JSONDecodeError:
        raise CredentialParseError("Failed to parse encrypted credentials")

    if not isinstance(raw, dict):
        raise CredentialParseError("Failed to parse encrypted credentials")

    credentials_class = CREDENTIALS_BY_TYPE[data_source.type]
    try:
        return credentials_class.model_validate(raw)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(loc) for loc in error['loc']) or 'credentials'}: {error['msg']}"
            for error in e.errors()
        ]
        logger.error(
            f"Invalid {data_source.type.value} credentials for data source {data_source.id}"
        )
        raise CredentialValidationError(
            f"Invalid {data_source.type.value} credentials", errors=errors
        )
