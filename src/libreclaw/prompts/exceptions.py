"""Prompt engine exception hierarchy.

All exceptions inherit from PromptEngineError and carry an error category so
callers (CLI, preview service) can map them to exit codes and HTTP statuses.
The assembler, filter and composer never raise for well-formed input; these
errors describe contract violations upstream of them.
"""

from enum import Enum


class ErrorCategory(Enum):
    """Error category for reporting and status mapping.

    Attributes:
        CONFIGURATION: Invalid customization config - reported before the engine runs
        ENVIRONMENT: Missing or unreadable caller-supplied context (e.g. workspace)
    """

    CONFIGURATION = "configuration"
    ENVIRONMENT = "environment"


class PromptEngineError(Exception):
    """Base exception for all prompt engine errors.

    Attributes:
        message: Human-readable error description
        category: Error category
        technical_details: Additional debugging information
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        technical_details: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.technical_details = technical_details or {}

    @property
    def is_user_error(self) -> bool:
        """Return True when the caller can fix the problem by changing its input."""
        return self.category == ErrorCategory.CONFIGURATION


class ConfigValidationError(PromptEngineError):
    """Invalid system prompt customization.

    Raised by the validation boundary, for example when ``removeSections``
    names a section id that is not in the registry.
    """

    def __init__(
        self,
        message: str,
        issues: list[str] | None = None,
        technical_details: dict | None = None,
    ) -> None:
        """Initialize ConfigValidationError.

        Args:
            message: Human-readable error description
            issues: One message per schema violation
            technical_details: Additional debugging information
        """
        details = dict(technical_details or {})
        if issues:
            details["issues"] = list(issues)
        super().__init__(message, ErrorCategory.CONFIGURATION, details)
        self.issues = list(issues or [])


class RuntimeEnvironmentError(PromptEngineError):
    """Required caller context is missing or unreadable.

    Raised while resolving generation inputs (workspace directory, bootstrap
    files), never by the assembler itself.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        technical_details: dict | None = None,
    ) -> None:
        """Initialize RuntimeEnvironmentError.

        Args:
            message: Human-readable error description
            path: Filesystem path that could not be used
            technical_details: Additional debugging information
        """
        details = dict(technical_details or {})
        if path:
            details["path"] = path
        super().__init__(message, ErrorCategory.ENVIRONMENT, details)
        self.path = path
