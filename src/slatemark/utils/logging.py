"""
Structured logging for slatemark.

Every component (converter, registry, cli) logs through a ``StructuredLogger``
that hands structlog events to the stdlib ``slatemark.<component>`` logger.
The package only attaches a ``NullHandler``; output appears once an
application installs handlers, normally through
``LoggerFactory.configure_logging``.
"""

import logging
import logging.config
import time
from contextlib import contextmanager
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

import structlog

ROOT_LOGGER_NAME = "slatemark"

LazyContext = Callable[[], Dict[str, Any]]


class LogLevel(str, Enum):
    """Log levels accepted by SLATEMARK_LOG_LEVEL."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Output formats accepted by SLATEMARK_LOG_FORMAT."""

    STRUCTURED = "structured"
    SIMPLE = "simple"
    JSON = "json"
    CONSOLE = "console"


class ContextKeys:
    """Context keys shared by converter and CLI log events."""

    COMPONENT = "component"
    OPERATION = "operation"
    DURATION_MS = "duration_ms"
    ERROR_TYPE = "error_type"
    NODE_TYPE = "node_type"
    NODE_COUNT = "node_count"
    CLI_COMMAND = "cli_command"
    SOURCE = "source"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class StructuredLogger:
    """
    Logger for one slatemark component.

    Context given at construction (or through ``bind``) is attached to every
    event. ``lazy_context`` builders run only when the level is enabled, so
    callers can attach costly details such as node counts for free at the
    default WARNING level.
    """

    def __init__(self, component: str, context: Optional[Dict[str, Any]] = None):
        self.component = component
        self.logger_name = f"{ROOT_LOGGER_NAME}.{component}"
        self.context: Dict[str, Any] = {ContextKeys.COMPONENT: component}
        self.context.update(context or {})
        self._stdlib = logging.getLogger(self.logger_name)
        self._logger = structlog.wrap_logger(self._stdlib)

    def is_enabled_for(self, level: str) -> bool:
        return self._stdlib.isEnabledFor(getattr(logging, level.upper()))

    def bind(self, **context: Any) -> "StructuredLogger":
        """Return a logger for the same component with extra fixed context."""
        return StructuredLogger(self.component, {**self.context, **context})

    def log(
        self,
        level: str,
        message: str,
        *,
        exception: Optional[BaseException] = None,
        lazy_context: Optional[LazyContext] = None,
        **context: Any,
    ) -> None:
        if not self.is_enabled_for(level):
            return

        event = {**self.context, **context}
        if lazy_context is not None:
            event.update(lazy_context())
        if exception is not None:
            event[ContextKeys.ERROR_TYPE] = type(exception).__name__
            event["error_message"] = str(exception)
            describe = getattr(exception, "get_context_for_logging", None)
            if callable(describe):
                event["error_context"] = describe()

        getattr(self._logger, level.lower())(message, **event)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log("debug", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log("info", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log("warning", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log("error", message, **kwargs)

    @contextmanager
    def operation_context(self, operation: str, **context: Any) -> Iterator["StructuredLogger"]:
        """
        Time an operation and log its start and outcome at DEBUG.

        Failures are logged with the exception's structured context and
        re-raised unchanged. Reporting them to a user is left to the caller.

        Yields:
            A logger bound to the operation name and ``context``
        """
        op_logger = self.bind(**{ContextKeys.OPERATION: operation}, **context)
        started = time.perf_counter()
        op_logger.debug(f"Starting operation: {operation}")

        try:
            yield op_logger
        except Exception as e:
            op_logger.debug(
                f"Operation '{operation}' failed",
                exception=e,
                **{ContextKeys.DURATION_MS: _elapsed_ms(started)},
            )
            raise

        op_logger.debug(
            f"Operation '{operation}' completed successfully",
            **{ContextKeys.DURATION_MS: _elapsed_ms(started)},
        )


def _renderer(format_type: str) -> Any:
    if format_type == LogFormat.JSON.value:
        return structlog.processors.JSONRenderer()
    if format_type == LogFormat.CONSOLE.value:
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.KeyValueRenderer()


class LoggerFactory:
    """Component logger cache plus the process-wide logging setup."""

    _loggers: Dict[str, StructuredLogger] = {}

    @classmethod
    def configure_logging(
        cls,
        level: str = LogLevel.WARNING.value,
        format_type: str = LogFormat.CONSOLE.value,
        log_file: Optional[Path] = None,
    ) -> None:
        """
        Install stderr (and optionally rotating file) handlers for slatemark.

        Args:
            level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            format_type: Log format (structured, simple, json, console)
            log_file: Also write log lines to this file
        """
        level = level.upper()
        # NOTE: Any type justified for processors - structlog processor signatures are complex and dynamic
        processors: List[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            _renderer(format_type),
        ]
        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
            cache_logger_on_first_use=False,
        )

        # structlog already renders json and console events completely
        formatter = format_type if format_type in ("structured", "simple") else "message"
        handlers: Dict[str, Dict[str, Any]] = {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "level": level,
                "stream": "ext://sys.stderr",
            }
        }
        if log_file:
            handlers["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": formatter,
                "level": level,
                "filename": str(log_file),
                "maxBytes": 10 * 1024 * 1024,  # 10MB
                "backupCount": 5,
            }

        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "structured": {"format": "%(asctime)s | %(name)s | %(levelname)s | %(message)s"},
                    "simple": {"format": "%(levelname)s: %(message)s"},
                    "message": {"format": "%(message)s"},
                },
                "handlers": handlers,
                "root": {"level": level, "handlers": list(handlers)},
            }
        )

    @classmethod
    def configure_from_settings(cls, settings: Any) -> None:
        """Configure logging from a resolved ``Settings`` instance."""
        cls.configure_logging(
            level=settings.log_level,
            format_type=settings.log_format,
            log_file=settings.log_file,
        )

    @classmethod
    def get_logger(cls, component: str) -> StructuredLogger:
        """Get or create the logger for a component."""
        if component not in cls._loggers:
            cls._loggers[component] = StructuredLogger(component)
        return cls._loggers[component]


@lru_cache()
def get_cli_logger() -> StructuredLogger:
    """Get CLI component logger."""
    return LoggerFactory.get_logger("cli")


@lru_cache()
def get_converter_logger() -> StructuredLogger:
    """Get converter component logger."""
    return LoggerFactory.get_logger("converter")
