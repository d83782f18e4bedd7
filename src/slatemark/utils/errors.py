"""Error types for slatemark, each carrying structured context for logs and the CLI."""

from pathlib import Path
from typing import Any, Dict, Iterable, NoReturn, Optional
from enum import Enum

import typer

from slatemark.utils.logging import get_cli_logger


class ErrorCategory(str, Enum):
    """What kind of input or environment problem an error reports."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    FILESYSTEM = "filesystem"
    RUNTIME = "runtime"


class SlatemarkError(Exception):
    """
    Base exception for slatemark.

    ``message`` is the technical description used in logs and ``str()``;
    ``user_message`` and ``help_text`` are what the CLI shows. ``context``
    holds the structured fields attached to log events.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
        category: ErrorCategory = ErrorCategory.RUNTIME,
        operation: Optional[str] = None,
        component: Optional[str] = None,
        user_message: Optional[str] = None,
        help_text: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)

        self.message = message
        self.category = category
        self.operation = operation
        self.component = component
        self.user_message = user_message or message
        self.help_text = help_text
        self.error_code = error_code

        self.context = {"category": category.value}
        if operation:
            self.context["operation"] = operation
        if component:
            self.context["component"] = component
        self.context.update(context or {})

    def __str__(self) -> str:
        if self.operation and self.component:
            return f"[{self.component.upper()}] {self.operation} failed: {self.message}"
        return self.message

    def get_user_message(self) -> str:
        return self.user_message

    def get_context_for_logging(self) -> Dict[str, Any]:
        """Context plus type, messages, code and hint, for structured logging."""
        log_context = dict(self.context)
        log_context.update(
            {
                "error_type": type(self).__name__,
                "error_message": self.message,
                "user_message": self.user_message,
            }
        )
        if self.error_code:
            log_context["error_code"] = self.error_code
        if self.help_text:
            log_context["help_text"] = self.help_text
        return log_context


class ConversionError(SlatemarkError):
    """Base class for failures while converting a Slate document to MDAST."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        node_type: Optional[str] = None,
        category: ErrorCategory = ErrorCategory.VALIDATION,
        user_message: Optional[str] = None,
        help_text: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            operation=operation,
            component="converter",
            category=category,
            user_message=user_message or "Document could not be converted to markdown",
            help_text=help_text or "Check that the document was produced by a supported editor schema",
            **kwargs,
        )

        if node_type is not None:
            self.context["node_type"] = node_type


class UnrecognizedNodeTypeError(ConversionError):
    """A block or inline node type outside the supported set."""

    def __init__(self, node_type: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Unrecognized node type: {node_type!r}",
            operation="convert_node",
            node_type=str(node_type),
            user_message=f"Unsupported document node type '{node_type}'",
            error_code="CNV001",
            **kwargs,
        )


class UnmappedMarkTypeError(ConversionError):
    """A text mark with no markdown equivalent."""

    def __init__(self, mark_type: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Unmapped mark type: {mark_type!r}",
            operation="convert_text_node",
            node_type="text",
            user_message=f"Unsupported text formatting '{mark_type}'",
            error_code="CNV002",
            **kwargs,
        )
        self.context["mark_type"] = str(mark_type)


class MissingRequiredChildError(ConversionError):
    """A node lacks the child its conversion depends on."""

    def __init__(self, message: str, *, node_type: str, child_count: int, **kwargs: Any) -> None:
        super().__init__(
            message,
            operation="convert_node",
            node_type=node_type,
            user_message=f"Malformed '{node_type}' block in document",
            error_code="CNV003",
            **kwargs,
        )
        self.context["child_count"] = child_count


class PluginNotFoundError(ConversionError):
    """A shortcode node names a plugin that is not registered."""

    def __init__(
        self,
        plugin_name: Optional[str],
        *,
        available: Iterable[str] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Shortcode plugin not registered: {plugin_name!r}",
            operation="convert_shortcode",
            node_type="shortcode",
            category=ErrorCategory.CONFIGURATION,
            user_message=f"No shortcode plugin named '{plugin_name}' is registered",
            help_text="Register the plugin or pass a registry that provides it",
            error_code="CNV004",
            **kwargs,
        )
        self.plugin_name = plugin_name
        self.context["plugin_name"] = plugin_name
        self.context["available_plugins"] = sorted(available)


class ConfigurationError(SlatemarkError):
    """Bad SLATEMARK_* settings or an unusable shortcode registry."""

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        user_message: Optional[str] = None,
        help_text: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message,
            component="config",
            category=ErrorCategory.CONFIGURATION,
            user_message=user_message or "Configuration error",
            help_text=help_text or "Check the SLATEMARK_* environment variables",
            error_code="CFG001",
            **kwargs,
        )

        if config_key:
            self.context["config_key"] = config_key


class FileSystemError(SlatemarkError):
    """The CLI could not read or parse its input."""

    def __init__(self, message: str, *, path: str, operation: str, **kwargs: Any) -> None:
        super().__init__(
            message,
            operation=operation,
            component="cli",
            category=ErrorCategory.FILESYSTEM,
            error_code="FS001",
            **kwargs,
        )
        self.context["file_path"] = path


class CLIErrorHandler:
    """Turns exceptions into CLI output and a ``typer.Exit``."""

    def handle_error(self, error: Exception, operation: str = "operation") -> NoReturn:
        """
        Log the failure, report it on stderr and exit with status 1.

        Raises:
            typer.Exit: always
        """
        get_cli_logger().error(f"CLI {operation} failed", exception=error)

        if isinstance(error, SlatemarkError):
            typer.echo(f"Error: {error.get_user_message()}", err=True)
            if error.message != error.user_message:
                typer.echo(f"Details: {error.message}", err=True)
            if error.help_text:
                typer.echo(f"Hint: {error.help_text}", err=True)
        else:
            typer.echo(f"Error: failed to {operation}: {error}", err=True)

        raise typer.Exit(code=1)

    def validate_path_exists(self, path: Path, description: str = "Path") -> None:
        """Exit with a filesystem error when ``path`` does not exist."""
        if not path.exists():
            error = FileSystemError(
                f"{description} not found: {path}",
                path=str(path),
                operation="validate_path",
                user_message=f"{description} does not exist: {path}",
                help_text=f"Ensure the {description.lower()} exists and is accessible",
            )
            self.handle_error(error, "validate_path")


# Global CLI error handler
cli_error_handler = CLIErrorHandler()
