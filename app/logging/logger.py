import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Stamps each record with the id of the HTTP request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()
        return True


class Log:
    """Centralized logging; records are tagged with the current request id."""

    _logger: logging.Logger = logging.getLogger("doc_classifier")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.addFilter(RequestIdFilter())
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] [%(request_id)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    @contextmanager
    def request_scope(cls, request_id: str) -> Iterator[None]:
        """Tag every record logged inside the block with ``request_id``."""
        token = _request_id.set(request_id)
        try:
            yield
        finally:
            _request_id.reset(token)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(message, extra=kwargs)
