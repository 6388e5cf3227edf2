"""
Component Logger

Provides colored logging for LibreClaw components with:
- Unified API for all components (prompts, preview service, CLI)
- Rich terminal output with component-specific colors
- Graceful fallbacks when configuration is unavailable

Usage:
    logger = get_logger("prompts")
    logger.key_info("Assembling system prompt")
    logger.info("Removed 2 sections")
    logger.debug("Detailed trace")
    logger.success("Prompt written")
    logger.warning("Something to note")
    logger.error("Something went wrong")
    logger.timing("Preview took 12 ms")

    # Custom loggers with explicit parameters
    logger = get_logger(name="custom_component", color="blue")
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from libreclaw.utils.config import get_config_value


class ComponentLogger:
    """
    Rich-formatted logger for LibreClaw components with color coding and message hierarchy.

    Message Types:
    - key_info: Important operational information
    - info: Normal operational messages
    - debug: Detailed tracing information
    - warning: Warning messages
    - error: Error messages
    - success: Success messages
    - timing: Timing information
    """

    def __init__(self, base_logger: logging.Logger, component_name: str, color: str = "white"):
        """
        Initialize component logger.

        Args:
            base_logger: Underlying Python logger
            component_name: Name of the component (e.g., 'prompts', 'preview')
            color: Rich color name for this component
        """
        self.base_logger = base_logger
        self.component_name = component_name
        self.color = color

    def _format_message(self, message: str, style: str, emoji: str = "") -> str:
        """Format message with Rich markup and emoji prefix."""
        prefix = f"{emoji}{self.component_name.title()}: "
        if style:
            return f"[{style}]{prefix}{message}[/{style}]"
        return f"{prefix}{message}"

    def key_info(self, message: str) -> None:
        """Important operational information."""
        style = f"bold {self.color}" if self.color != "white" else "bold white"
        self.base_logger.info(self._format_message(message, style))

    def info(self, message: str) -> None:
        """Info message."""
        self.base_logger.info(self._format_message(message, self.color))

    def debug(self, message: str) -> None:
        """Debug message for detailed technical tracing."""
        style = f"dim {self.color}" if self.color != "white" else "dim white"
        self.base_logger.debug(self._format_message(message, style, "🔍 "))

    def warning(self, message: str) -> None:
        """Warning message."""
        self.base_logger.warning(self._format_message(message, "bold yellow", "⚠️  "))

    def error(self, message: str, exc_info: bool = False) -> None:
        """Error message.

        Args:
            message: Error message
            exc_info: Whether to include exception traceback
        """
        self.base_logger.error(self._format_message(message, "bold red", "❌ "), exc_info=exc_info)

    def success(self, message: str) -> None:
        """Success message."""
        self.base_logger.info(self._format_message(message, "bold green", "✅ "))

    def timing(self, message: str) -> None:
        """Timing information."""
        self.base_logger.info(self._format_message(message, "bold white", "🕒 "))

    @property
    def level(self) -> int:
        return self.base_logger.level

    @property
    def name(self) -> str:
        return self.base_logger.name

    def setLevel(self, level: int) -> None:
        self.base_logger.setLevel(level)

    def isEnabledFor(self, level: int) -> bool:
        return self.base_logger.isEnabledFor(level)


def _setup_rich_logging(level: int = logging.INFO) -> None:
    """Configure Rich logging for the root logger (called once)."""
    root_logger = logging.getLogger()

    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler):
            return

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.setLevel(level)

    try:
        # Hide locals by default to avoid leaking prompt text and secrets into tracebacks
        rich_tracebacks = get_config_value("logging.rich_tracebacks", True)
        show_traceback_locals = get_config_value("logging.show_traceback_locals", False)
        show_full_paths = get_config_value("logging.show_full_paths", False)
    except Exception:
        rich_tracebacks = True
        show_traceback_locals = False
        show_full_paths = False

    # stderr keeps stdout clean for command output such as `libreclaw prompt build`
    console = Console(
        stderr=True,
        force_terminal=True,  # Color output in containers and CI
        width=120,
        color_system="truecolor",
    )

    handler = RichHandler(
        console=console,
        rich_tracebacks=rich_tracebacks,
        markup=True,
        show_path=show_full_paths,
        show_time=True,
        show_level=True,
        tracebacks_show_locals=show_traceback_locals,
    )

    root_logger.addHandler(handler)

    for lib in ["httpx", "httpcore", "uvicorn.access"]:
        logging.getLogger(lib).setLevel(logging.WARNING)


def get_logger(
    component_name: str = None,
    level: int = logging.INFO,
    *,
    name: str = None,
    color: str = None,
) -> ComponentLogger:
    """
    Get a component logger with Rich formatting.

    Args:
        component_name: Component name (e.g., 'prompts', 'preview', 'cli').
            The color is read from ``logging.logging_colors.<component_name>``.
        level: Logging level
        name: Direct logger name for custom loggers (keyword-only)
        color: Direct color specification for custom loggers (keyword-only)

    Returns:
        ComponentLogger instance

    Raises:
        ValueError: If neither component_name nor name is given

    Examples:
        logger = get_logger("prompts")
        logger.info("Assembling prompt")

        logger = get_logger(name="test_logger", color="blue")
    """
    _setup_rich_logging(level)

    if name is not None:
        return ComponentLogger(logging.getLogger(name), name, color or "white")

    if component_name is None:
        raise ValueError(
            "Component name is required. Usage: get_logger('component_name') or "
            "get_logger(name='custom_name', color='blue')"
        )

    base_logger = logging.getLogger(component_name)

    try:
        color = get_config_value(f"logging.logging_colors.{component_name}")
        if not color:
            color = "white"
    except Exception as e:
        color = "white"
        if os.getenv("DEBUG_LOGGING"):
            print(
                f"⚠️  WARNING: Failed to load color config for {component_name}: {e}. Using white as fallback."
            )

    return ComponentLogger(base_logger, component_name, color)
