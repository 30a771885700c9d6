"""Logging for docacl.

Wraps the standard library ``logging`` module with a contextual logger that
carries key/value dimensions (request id, component, ...) through to every
record it emits.

Usage:
    from docacl.core.logging import logger

    request_logger = logger.with_context(request_id="abc123")
    request_logger.info("[AccessControlFilter] Resolving access tokens...")
"""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from docacl.core.config import Environment, settings

_ROOT_LOGGER_NAME = "docacl"


class _DimensionFormatter(logging.Formatter):
    """Appends the record's dimensions to the formatted message."""

    def __init__(self, verbose: bool) -> None:
        """Initialize the formatter.

        Args:
            verbose: Human-readable layout (local development) vs compact key=value.
        """
        if verbose:
            fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        else:
            fmt = "time=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"
        super().__init__(fmt)
        self._verbose = verbose

    def format(self, record: logging.LogRecord) -> str:
        """Format the record and append dimensions, if any."""
        line = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if not dimensions:
            return line
        rendered = " ".join(f"{k}={v}" for k, v in dimensions.items())
        if self._verbose:
            return f"{line} | {rendered}"
        return f"{line} {rendered}"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter with a message prefix and key/value dimensions.

    ``with_context`` and ``with_prefix`` return new loggers; the original
    is never mutated, so it is safe to share across concurrent requests.
    """

    def __init__(
        self,
        logger: logging.Logger,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            logger: Underlying standard library logger
            prefix: Text prepended to every message
            dimensions: Key/value pairs attached to every record
        """
        super().__init__(logger, {})
        self.prefix = prefix
        self.dimensions: Dict[str, Any] = dict(dimensions or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Attach dimensions to the record and apply the prefix."""
        extra = dict(kwargs.get("extra") or {})
        dims = dict(self.dimensions)
        dims.update(extra.pop("dimensions", {}) or {})
        extra["dimensions"] = dims
        kwargs["extra"] = extra
        if self.prefix:
            msg = f"{self.prefix}{msg}"
        return msg, kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions."""
        merged = {**self.dimensions, **dimensions}
        return ContextualLogger(self.logger, prefix=self.prefix, dimensions=merged)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger with an additional message prefix."""
        return ContextualLogger(
            self.logger, prefix=f"{self.prefix}{prefix}", dimensions=self.dimensions
        )


class LoggerConfigurator:
    """Builds contextual loggers under the ``docacl`` logger hierarchy."""

    _configured = False

    @classmethod
    def _configure_root(cls) -> None:
        """Install the handler on the docacl root logger once."""
        if cls._configured:
            return
        root = logging.getLogger(_ROOT_LOGGER_NAME)
        if not root.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                _DimensionFormatter(verbose=settings.ENVIRONMENT == Environment.LOCAL)
            )
            root.addHandler(handler)
        root.setLevel(settings.LOG_LEVEL)
        cls._configured = True

    @classmethod
    def configure_logger(
        cls,
        name: str,
        prefix: str = "",
        dimensions: Optional[Dict[str, Any]] = None,
    ) -> ContextualLogger:
        """Create a contextual logger.

        Args:
            name: Logger name, e.g. "docacl.domains.authority"
            prefix: Text prepended to every message
            dimensions: Key/value pairs attached to every record

        Returns:
            A ContextualLogger for the given name
        """
        cls._configure_root()
        return ContextualLogger(logging.getLogger(name), prefix=prefix, dimensions=dimensions)


logger = LoggerConfigurator.configure_logger(_ROOT_LOGGER_NAME)
