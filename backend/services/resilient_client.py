"""Bounded retries, linear backoff and a circuit breaker around remote calls.

Callers get the operation's result or None; they never see the exception.
That keeps the orchestrator's fallback decision a plain ``is None`` check.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from config import settings
from services.errors import RemoteServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    backoff_seconds: float = 1.0

    def delay_before(self, attempt: int) -> float:
        """Delay after failed attempt number `attempt` (1-based): linear growth."""
        return self.backoff_seconds * attempt


class CircuitBreaker:
    """Opens after `threshold` consecutive failed calls.

    While open every call is short-circuited. Once `reset_seconds` have
    passed a single trial call is let through; success closes the circuit,
    failure re-opens it.
    """

    def __init__(
        self,
        threshold: int = 5,
        reset_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.threshold = threshold
        self.reset_seconds = reset_seconds
        self._clock = clock
        self._failures = 0
        self._opened_at: float | None = None

    @property
    def is_open(self) -> bool:
        return self._opened_at is not None

    def allow(self) -> bool:
        if self._opened_at is None:
            return True
        if self._clock() - self._opened_at >= self.reset_seconds:
            # Half-open: let one trial through, re-arm the timer for the rest
            self._opened_at = self._clock()
            return True
        return False

    def record_success(self) -> None:
        if self._opened_at is not None:
            logger.info("Circuit closed after successful trial call")
        self._failures = 0
        self._opened_at = None

    def record_failure(self) -> None:
        self._failures += 1
        if self._failures >= self.threshold:
            if self._opened_at is None:
                logger.warning("Circuit opened after %d consecutive failures", self._failures)
            self._opened_at = self._clock()


class ResilientClient:
    def __init__(
        self,
        policy: RetryPolicy | None = None,
        breaker: CircuitBreaker | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self.breaker = breaker or CircuitBreaker()
        self._sleep = sleep

    async def call(self, operation: Callable[[], Awaitable[T]], name: str = "remote call") -> T | None:
        """Run operation with retries. Returns None once the service counts as unavailable."""
        if not self.breaker.allow():
            logger.info("%s skipped: circuit open", name)
            return None

        attempts = max(1, self.policy.max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                result = await operation()
            except RemoteServiceError as e:
                if e.retryable and attempt < attempts:
                    delay = self.policy.delay_before(attempt)
                    logger.warning(
                        "%s failed (attempt %d/%d): %s; retrying in %.1fs",
                        name, attempt, attempts, e, delay,
                    )
                    await self._sleep(delay)
                    continue
                logger.warning("%s failed after %d attempt(s): %s", name, attempt, e)
                self.breaker.record_failure()
                return None
            except Exception:
                # Unclassified client error: a hard failure, never retried
                logger.exception("%s failed unexpectedly (attempt %d/%d)", name, attempt, attempts)
                self.breaker.record_failure()
                return None
            self.breaker.record_success()
            return result
        return None


def build_resilient_client() -> ResilientClient:
    return ResilientClient(
        policy=RetryPolicy(
            max_attempts=settings.remote_max_attempts,
            backoff_seconds=settings.remote_backoff_seconds,
        ),
        breaker=CircuitBreaker(
            threshold=settings.circuit_breaker_threshold,
            reset_seconds=settings.circuit_breaker_reset_seconds,
        ),
    )
