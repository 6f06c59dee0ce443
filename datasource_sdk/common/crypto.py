"""Symmetric encryption of stored data source credentials."""

from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from datasource_sdk.common.error_codes import CommonError
from datasource_sdk.config import get_settings
from datasource_sdk.credentials.exceptions import CredentialParseError


class FernetDecryptor:
    """Encrypt/decrypt credential blobs with a Fernet key.

    Instances are callable so they can be passed wherever a ``decrypt``
    function is expected.
    """

    def __init__(self, secret_key: Optional[str] = None):
        key = secret_key or get_settings().secret_key
        if not key:
            raise CommonError(
                CommonError.CREDENTIALS_DECRYPT_ERROR,
                "No secret key configured, set DATASOURCE_SDK_SECRET_KEY",
            )
        try:
            self._fernet = Fernet(key.encode() if isinstance(key, str) else key)
        except ValueError as e:
            raise CommonError(
                CommonError.CREDENTIALS_DECRYPT_ERROR, f"Invalid secret key: {e}"
            )

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode()

    def encrypt(self, value: str) -> str:
        return self._fernet.encrypt(value.encode()).decode()

    def decrypt(self, value: str) -> str:
        try:
            return self._fernet.decrypt(value.encode()).decode()
        except InvalidToken:
            raise CredentialParseError(
                "Failed to decrypt credentials, the token is invalid for the configured key"
            )

    def __call__(self, value: str) -> str:
        return self.decrypt(value)
