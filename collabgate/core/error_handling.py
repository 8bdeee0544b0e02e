"""
Error handling utilities for collaboration routing.

This module provides the routing exceptions, a decorator that turns failed
outbound lookups into those exceptions, and the uniform failure response
returned to clients.
"""
import asyncio
import logging
import time
from typing import Callable, Type, TypeVar, ParamSpec
from functools import wraps
from contextvars import ContextVar

import httpx
from pydantic import ValidationError
from starlette.responses import Response

from collabgate.core.config import DEFAULT_SLOW_LOOKUP_MS

logger = logging.getLogger(__name__)

# Context variable for request ID tracking across async contexts
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

# Type variables for generic function signatures
P = ParamSpec('P')
T = TypeVar('T')

EXPECTATION_FAILED_STATUS = 417
EXPECTATION_FAILED_BODY = "417 Expectation Failed\n"


# ============================================================================
# Custom Exceptions
# ============================================================================

class CollaborationError(Exception):
    """Base exception for collaboration routing errors."""
    pass


class RegistryUnavailable(CollaborationError):
    """Local or next center info lookup failed (transport or decode)."""
    pass


class PlanningUnavailable(CollaborationError):
    """Optimal path lookup failed (transport or decode)."""
    pass


class NotOnRoute(CollaborationError):
    """The local center code does not appear in the request's route."""

    def __init__(self, center_code: str, route: object):
        self.center_code = center_code
        self.route = route
        super().__init__(f"Center '{center_code}' is not on route '{route}'")


class MissingDestination(CollaborationError):
    """Request names no destination center and carries no route."""
    pass


class MalformedRoute(CollaborationError):
    """The route has an empty code where the next hop should be."""

    def __init__(self, center_code: str, route: object):
        self.center_code = center_code
        self.route = route
        super().__init__(f"Route '{route}' has no next center after '{center_code}'")


# ============================================================================
# Lookup Error Translation
# ============================================================================

def translate_lookup_errors(
    error_cls: Type[CollaborationError],
    action: str = "Lookup"
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for outbound registry/planner calls.

    Times the call, warns when it is slower than the owning client's
    ``slow_threshold_ms``, and converts transport and decode failures into
    ``error_cls`` so callers only ever see routing errors.

    Args:
        error_cls: CollaborationError subclass to raise on failure
        action: Human readable name of the call, used in logs and messages

    Example:
        @translate_lookup_errors(RegistryUnavailable, "Center info lookup")
        async def lookup(self, center_code: str = "") -> CoCenterInfo:
            ...
    """
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        if not asyncio.iscoroutinefunction(func):
            raise TypeError(f"{func.__name__} must be a coroutine function")

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            request_id = request_id_var.get()
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)
            except CollaborationError:
                raise
            except httpx.TimeoutException as e:
                elapsed = time.time() - start_time
                logger.error(f"[{request_id}] {action} timed out after {elapsed:.2f}s: {e!r}")
                raise error_cls(f"{action} timed out") from e
            except httpx.HTTPError as e:
                elapsed = time.time() - start_time
                logger.error(f"[{request_id}] {action} - HTTP error after {elapsed:.2f}s: {e}")
                raise error_cls(f"{action} failed: {e}") from e
            except (ValidationError, ValueError) as e:
                # json decode errors are ValueErrors
                elapsed = time.time() - start_time
                logger.error(f"[{request_id}] {action} - Undecodable response after {elapsed:.2f}s: {e}")
                raise error_cls(f"{action} returned an invalid response") from e

            elapsed_ms = (time.time() - start_time) * 1000
            # Bound methods carry the owning client's threshold
            owner = args[0] if args else None
            threshold_ms = getattr(owner, "slow_threshold_ms", DEFAULT_SLOW_LOOKUP_MS)
            if elapsed_ms > threshold_ms:
                logger.warning(
                    f"[{request_id}] SLOW LOOKUP: {action} took {elapsed_ms:.0f}ms "
                    f"(> {threshold_ms}ms threshold)"
                )
            else:
                logger.debug(f"[{request_id}] {action} completed in {elapsed_ms:.0f}ms")
            return result

        return async_wrapper  # type: ignore

    return decorator


def expectation_failed_response() -> Response:
    """Uniform response for any collaboration failure."""
    return Response(
        content=EXPECTATION_FAILED_BODY,
        status_code=EXPECTATION_FAILED_STATUS,
        headers={"Content-Type": "text/plain"},
    )
