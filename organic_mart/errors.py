"""
Permission-denial errors and the in-process event bus that carries them.

Write paths that the access rules reject raise ``PermissionDeniedError``.
The API exception handler publishes the error on ``error_emitter`` under
``PERMISSION_ERROR_EVENT`` so listeners (logging, notifications) see every
denial with its request context.
"""
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, Literal, Optional

from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

PERMISSION_ERROR_EVENT = "permission-error"

Operation = Literal["get", "list", "create", "update", "delete", "write"]


class PermissionDeniedError(Exception):
    """A store operation was denied by the access rules."""

    def __init__(self, path: str, operation: Operation, request_resource_data: Optional[Any] = None):
        super().__init__("Permission Denied: the following request was denied by access rules.")
        self.path = path
        self.operation = operation
        self.request_resource_data = request_resource_data

    def to_context(self) -> Dict[str, Any]:
        context: Dict[str, Any] = {"path": self.path, "operation": self.operation}
        if self.request_resource_data is not None:
            context["request_resource_data"] = self.request_resource_data
        return context


class RatingConflictError(Exception):
    """The rating transaction lost every retry to concurrent writers."""

    def __init__(self, product_id: str, attempts: int):
        super().__init__(f"Rating update for product {product_id} conflicted {attempts} times")
        self.product_id = product_id
        self.attempts = attempts


class ErrorEmitter:
    """Minimal synchronous publish/subscribe bus keyed by event name."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        if listener not in self._listeners[event]:
            self._listeners[event].append(listener)

    def off(self, event: str, listener: Callable[..., Any]) -> None:
        if listener in self._listeners[event]:
            self._listeners[event].remove(listener)

    def listeners(self, event: str) -> List[Callable[..., Any]]:
        return list(self._listeners[event])

    def emit(self, event: str, *args: Any) -> int:
        """Call every listener for ``event``; returns how many were called."""
        listeners = self.listeners(event)
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                logger.exception("Listener %r failed for event %s", listener, event)
        return len(listeners)


error_emitter = ErrorEmitter()


def log_permission_error(error: PermissionDeniedError) -> None:
    logger.error("Permission denied: %s", error.to_context())


@asynccontextmanager
async def guarded_write(path: str, operation: Operation, request_resource_data: Optional[Any] = None):
    """Turn a failed store write into a ``PermissionDeniedError`` for ``path``."""
    try:
        yield
    except PyMongoError as e:
        logger.debug("Write to %s failed: %s", path, e)
        raise PermissionDeniedError(path, operation, request_resource_data) from e
