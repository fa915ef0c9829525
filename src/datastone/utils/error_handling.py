"""Error handling utilities for datastone.

Backend stores raise their own exception types; the decorator below turns
them into the public errors of ``datastone.errors`` at the storage API
boundary.
"""

from loguru import logger
import functools
from typing import Any, Callable, TypeVar

from ..backend.base import BadKey, BackendStoreError, Done, NoSuchEntity
from ..errors import BackendError, DatastoneError, KeyDecodeError, NotFoundError


T = TypeVar('T')


def translate_backend_errors(operation_name: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to classify backend errors.

    ``NoSuchEntity`` and the ``Done`` sentinel become NotFoundError, ``BadKey``
    becomes KeyDecodeError and any other backend failure becomes BackendError.
    Errors that are already public pass through untouched.

    Args:
        operation_name: Name of the operation for logging purposes

    Returns:
        The decorated function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except DatastoneError:
                raise
            except (NoSuchEntity, Done) as e:
                logger.debug(f"Nothing found to {operation_name}")
                raise NotFoundError(f"Failed to {operation_name}: not found") from e
            except BadKey as e:
                logger.warning(f"Failed to {operation_name}: {e}")
                raise KeyDecodeError(str(e)) from e
            except BackendStoreError as e:
                logger.error(f"Failed to {operation_name}: {e}")
                raise BackendError(f"Failed to {operation_name}: {e}") from e
        return wrapper
    return decorator
