"""
Error Handling Utilities for the ADCS Simulation Configuration

Provides consistent error handling patterns across the codebase:
- Decorator for automatic error context
- Context manager for error handling

Usage:
    from adcs_sim.core.error_handling import with_error_context

    @with_error_context("Configuration parse")
    def parse_document(path):
        ...
"""

import functools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from adcs_sim.core.exceptions import ADCSException

logger = logging.getLogger(__name__)

# Type variable for function return type
F = TypeVar("F", bound=Callable[..., Any])


def with_error_context(
    operation: str,
    reraise: bool = True,
    log_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Decorator to add error context to function calls.

    Our own exceptions pass through untouched. Anything else is logged with
    the operation name and, if reraise is set, wrapped in ADCSException.

    Args:
        operation: Description of the operation (e.g., "Configuration parse")
        reraise: If True, re-raise exception (wrapped if needed). If False, log and return None.
        log_level: Logging level for errors (default: ERROR)

    Returns:
        Decorated function
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with error_context(operation, reraise=reraise, log_level=log_level):
                return func(*args, **kwargs)
            return None

        return wrapper  # type: ignore

    return decorator


@contextmanager
def error_context(
    operation: str,
    reraise: bool = True,
    log_level: int = logging.ERROR,
) -> Iterator[None]:
    """
    Context manager for error handling with context.

    Usage:
        with error_context("Reading configuration"):
            text = path.read_text()

    Args:
        operation: Description of the operation
        reraise: If True, re-raise exception. If False, log and suppress.
        log_level: Logging level for errors
    """
    try:
        yield
    except ADCSException:
        raise
    except KeyboardInterrupt:
        raise
    except Exception as e:
        error_msg = f"{operation} failed: {e}"
        logger.log(log_level, error_msg, exc_info=True)

        if reraise:
            raise ADCSException(error_msg) from e
