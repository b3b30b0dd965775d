"""
Custom Exception Hierarchy for the ADCS Simulation Configuration

Defines structured exception classes raised while reading the hardware
configuration and building sensor/actuator objects from it.

Exception categories:
- Configuration errors: unreadable, malformed or inconsistent documents
- Unknown component types: type tags with no matching record variant
"""

from typing import Any, Iterable, Optional


class ADCSException(Exception):
    """Base exception for all ADCS simulation errors."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(ADCSException):
    """Raised when configuration is invalid or inconsistent."""

    pass


class ParseError(ConfigurationError):
    """Raised when a required key is missing or a value has the wrong shape."""

    def __init__(self, key: str, reason: str, value: Any = None) -> None:
        message = f"Invalid configuration value at '{key}': {reason}"
        if value is not None:
            message += f" (got {value!r})"
        super().__init__(message)
        self.key = key
        self.reason = reason
        self.value = value


class UnknownTypeError(ConfigurationError):
    """Raised when a sensor or actuator type tag matches no known variant."""

    def __init__(
        self,
        category: str,
        name: str,
        type_name: Any,
        known: Optional[Iterable[str]] = None,
    ) -> None:
        self.known = sorted(known) if known is not None else []
        message = f"Unknown {category} type {type_name!r} for '{name}'"
        if self.known:
            message += f" (expected one of: {', '.join(self.known)})"
        super().__init__(message)
        self.category = category
        self.name = name
        self.type_name = type_name


class ConfigFileError(ConfigurationError):
    """Raised when a configuration document cannot be read."""

    def __init__(self, file_path: str, operation: str, reason: str = ""):
        message = f"Configuration file {operation} failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation


# ============================================================================
# Utility Functions
# ============================================================================


def format_exception_message(exc: Exception) -> str:
    """
    Format exception message with context information.

    Args:
        exc: Exception to format

    Returns:
        Formatted error message string
    """
    exc_type = type(exc).__name__
    exc_message = str(exc)
    return f"[{exc_type}] {exc_message}"
