"""Console styling for the LibreClaw CLI.

Semantic style names (success, error, header, ...) are mapped to colors in a
single Rich theme so every command renders consistently.
"""

from rich.console import Console
from rich.theme import Theme

LIBRECLAW_THEME = Theme(
    {
        "success": "green",
        "error": "bold red",
        "warning": "yellow",
        "header": "bold cyan",
        "label": "bold",
        "path": "magenta",
        "accent": "cyan",
        "border": "cyan",
    }
)

console = Console(theme=LIBRECLAW_THEME)
err_console = Console(theme=LIBRECLAW_THEME, stderr=True)


class Styles:
    """Reusable style names defined in the theme."""

    HEADER = "header"
    LABEL = "label"
    ACCENT = "accent"
    BORDER = "border"


class Messages:
    """Pre-formatted message helpers for common patterns."""

    @staticmethod
    def success(text: str) -> str:
        return f"[success]✓ {text}[/success]"

    @staticmethod
    def error(text: str) -> str:
        return f"[error]✗ {text}[/error]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[warning]⚠️  {text}[/warning]"

    @staticmethod
    def path(text: str) -> str:
        return f"[path]{text}[/path]"
