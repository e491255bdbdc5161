"""
Circuit Breaker configuration for document store calls.

The remote store is read on every aggregation with a full-collection fan-out,
so an unreachable store would otherwise pile up slow requests. The breaker
fails fast once the store keeps erroring.

Circuit Breaker Pattern:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many failures, requests fail immediately
- HALF_OPEN: Testing if service recovered, limited requests allowed

Configuration:
- fail_max: Number of consecutive failures before opening circuit
- reset_timeout: Seconds to wait before attempting recovery (HALF_OPEN)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, TypeVar

from pybreaker import STATE_OPEN, CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)

T = TypeVar("T")


def log_circuit_state_change(breaker_name: str, old_state: str, new_state: str):
    """
    Log circuit breaker state changes for monitoring and alerting.
    """
    logger.warning(
        "Circuit breaker state changed",
        extra={
            "breaker_name": breaker_name,
            "old_state": old_state,
            "new_state": new_state,
        }
    )


class StateChangeLogger(CircuitBreakerListener):
    """Listener for circuit breaker state changes."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        log_circuit_state_change(self.name, old_state.name, new_state.name)


def build_store_breaker(fail_max: int = 5, reset_timeout: int = 60) -> CircuitBreaker:
    return CircuitBreaker(
        fail_max=fail_max,
        reset_timeout=reset_timeout,
        name="document_store_circuit_breaker",
        listeners=[StateChangeLogger("document_store")],
    )


store_breaker = build_store_breaker()


def _reset_timeout_elapsed(breaker: CircuitBreaker) -> bool:
    opened_at = breaker._state_storage.opened_at
    if opened_at is None:
        return True
    now = datetime.now(timezone.utc)
    # pybreaker stores naive UTC in older releases
    if opened_at.tzinfo is None:
        now = now.replace(tzinfo=None)
    return now >= opened_at + timedelta(seconds=breaker.reset_timeout)


async def call_with_breaker(
    breaker: CircuitBreaker,
    func: Callable[..., Awaitable[T]],
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Await ``func`` under ``breaker``.

    pybreaker only drives synchronous callables, so the coroutine is awaited
    here and its outcome is replayed through ``breaker.call`` to record the
    success or failure. While the circuit is open and ``reset_timeout`` has
    not elapsed, ``CircuitBreakerError`` is raised without calling ``func``.
    Once it has elapsed the real outcome is the half-open trial.
    """
    if breaker.current_state == STATE_OPEN and not _reset_timeout_elapsed(breaker):
        raise CircuitBreakerError("Timeout not elapsed yet, circuit breaker still open")

    error: BaseException | None = None
    result = None
    try:
        result = await func(*args, **kwargs)
    except Exception as exc:
        error = exc

    def _replay():
        if error is not None:
            raise error
        return result

    return breaker.call(_replay)


__all__ = [
    "store_breaker",
    "build_store_breaker",
    "call_with_breaker",
    "CircuitBreakerError",
]
