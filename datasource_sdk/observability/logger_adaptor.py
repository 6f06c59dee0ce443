"""Loguru backed logger used across datasource-sdk."""

import logging
import sys
from typing import Any, Dict, Optional

from loguru import logger as _loguru_logger

from datasource_sdk.constants import LOG_LEVEL

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> - <level>{message}</level>"
)

_loguru_logger.remove()
_loguru_logger.configure(extra={"logger_name": ""})
_loguru_logger.add(sys.stderr, level=LOG_LEVEL, format=LOG_FORMAT, colorize=True)


class InterceptHandler(logging.Handler):
    """Forward records emitted through the stdlib logging module (sqlalchemy, drivers) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        _loguru_logger.bind(logger_name=record.name).opt(
            exception=record.exc_info
        ).log(level, record.getMessage())


logging.basicConfig(
    level=logging.getLevelNamesMapping()[LOG_LEVEL], handlers=[InterceptHandler()]
)


class DataSourceLoggerAdapter:
    """Minimal logger that forwards to loguru with the logger name bound.

    Keyword arguments passed to the log methods are bound as extra fields
    instead of being used for message formatting.
    """

    def __init__(self, name: str) -> None:
        self.logger_name = name
        self._log = _loguru_logger.bind(logger_name=name)

    def _bound(self, kwargs: Dict[str, Any]):
        exc_info = kwargs.pop("exc_info", False)
        log = self._log.bind(**kwargs) if kwargs else self._log
        return log.opt(exception=exc_info) if exc_info else log

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._bound(kwargs).debug(msg, *args)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._bound(kwargs).info(msg, *args)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._bound(kwargs).warning(msg, *args)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._bound(kwargs).error(msg, *args)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log.bind(**kwargs).exception(msg, *args)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._bound(kwargs).critical(msg, *args)


_logger_instances: Dict[str, DataSourceLoggerAdapter] = {}


def get_logger(name: Optional[str] = None) -> DataSourceLoggerAdapter:
    """Get or create an instance of DataSourceLoggerAdapter.

    Args:
        name (str, optional): Logger name. If None, uses this module's name.

    Returns:
        DataSourceLoggerAdapter: Logger instance for the specified name
    """
    if name is None:
        name = __name__
    if name not in _logger_instances:
        _logger_instances[name] = DataSourceLoggerAdapter(name)

    return _logger_instances[name]
