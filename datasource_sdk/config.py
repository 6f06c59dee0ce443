"""Configuration settings for datasource-sdk using Pydantic."""

from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from datasource_sdk.constants import SECRET_KEY, SQL_CONNECT_TIMEOUT


class DataSourceSDKSettings(BaseSettings):
    """Central configuration for datasource-sdk.

    This class uses Pydantic's BaseSettings which allows for configuration via environment
    variables and/or direct assignment. Environment variables take precedence over defaults.

    Environment Variables:
        DATASOURCE_SDK_SECRET_KEY: Fernet key used to decrypt stored credentials
        DATASOURCE_SDK_MAX_PAGE_SIZE: Upper bound applied to caller supplied limits
        DATASOURCE_SDK_CONNECT_TIMEOUT: Connection timeout (seconds) passed to the drivers
    """

    model_config = SettingsConfigDict(
        env_prefix="DATASOURCE_SDK_",
        case_sensitive=False,
        extra="allow",
    )

    secret_key: str = SECRET_KEY

    max_page_size: int = 1000

    connect_timeout: int = SQL_CONNECT_TIMEOUT

    @classmethod
    def get_settings(cls, **kwargs: Any) -> "DataSourceSDKSettings":
        """Create settings with optional overrides."""
        return cls(**kwargs)


# Global settings instance with default values
settings = DataSourceSDKSettings()


@lru_cache()
def get_settings() -> DataSourceSDKSettings:
    """Get the global settings instance.

    Returns:
        DataSourceSDKSettings: The global settings instance.

    Note:
        This function is cached to avoid re-reading environment variables.
        To refresh settings, call get_settings.cache_clear()
    """
    return settings


def configure_settings(**kwargs: Any) -> None:
    """Configure global settings with overrides.

    Args:
        **kwargs: Keyword arguments to override default settings.

    Example:
        >>> configure_settings(secret_key="...", max_page_size=500)
    """
    global settings
    settings = DataSourceSDKSettings.get_settings(**kwargs)
    get_settings.cache_clear()
