"""
Execution contexts — separate WHAT (pure logic) from HOW (side effects).

  - Pure functions describe WHAT should happen → return Result[T, E]
  - ExecutionContext describes HOW it happens → timing, logging, boundaries
  - They are NEVER mixed (stages don't log or time themselves)

Contexts wrap a zero-argument computation, either synchronous
(execute) or asynchronous (execute_async):

    ctx = LoggingExecutionContext(operation="PlaceOrder")
    result = await ctx.execute_async(lambda: place_order(command, ...))

A context is the outermost boundary of a workflow. Domain failures come back
as Failure values and are only observed; an exception escaping the
computation is a fatal condition, so it is logged and re-raised, never turned
into a Failure that would leak outside the workflow's declared error type.
"""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable, Protocol, TypeVar, runtime_checkable

from railway.result import Result

T = TypeVar("T")
E = TypeVar("E")
logger = logging.getLogger("railway.execution")


# ──────────────────────── Protocol (Interface) ────────────────────────


@runtime_checkable
class ExecutionContext(Protocol):
    """
    Protocol for execution contexts.

    Any class implementing execute() and execute_async() satisfies this
    protocol via structural typing — no explicit inheritance needed.
    """

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        """Execute a Result-returning computation within this context."""
        ...

    async def execute_async(
        self, computation: Callable[[], Awaitable[Result[T, E]]]
    ) -> Result[T, E]:
        """Await a Result-returning coroutine within this context."""
        ...


# ──────────────────────── NoOp (Testing) ────────────────────────


class NoOpExecutionContext:
    """
    Passthrough execution context — runs computation without any wrapper.

    Use for unit tests and for pure logic that needs no boundary.
    """

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        return computation()

    async def execute_async(
        self, computation: Callable[[], Awaitable[Result[T, E]]]
    ) -> Result[T, E]:
        return await computation()


# ──────────────────────── Logging ────────────────────────


class LoggingExecutionContext:
    """
    Execution context that logs entry, exit, duration, and result state.

    Wraps another context (decorator pattern) to add observability.

        ctx = LoggingExecutionContext(operation="PlaceOrder")
    """

    def __init__(
        self,
        inner: ExecutionContext | None = None,
        operation: str = "unknown",
        log_level: int = logging.INFO,
    ) -> None:
        self._inner = inner or NoOpExecutionContext()
        self._operation = operation
        self._log_level = log_level

    def execute(self, computation: Callable[[], Result[T, E]]) -> Result[T, E]:
        logger.log(self._log_level, "[%s] Starting execution", self._operation)
        start = time.monotonic()
        try:
            result = self._inner.execute(computation)
        except Exception as e:
            self._log_fatal(start, e)
            raise
        self._log_completed(start, result)
        return result

    async def execute_async(
        self, computation: Callable[[], Awaitable[Result[T, E]]]
    ) -> Result[T, E]:
        logger.log(self._log_level, "[%s] Starting execution", self._operation)
        start = time.monotonic()
        try:
            result = await self._inner.execute_async(computation)
        except Exception as e:
            self._log_fatal(start, e)
            raise
        self._log_completed(start, result)
        return result

    def _log_fatal(self, start: float, error: Exception) -> None:
        logger.error(
            "[%s] Execution aborted after %.3fs: %s",
            self._operation,
            time.monotonic() - start,
            error,
        )

    def _log_completed(self, start: float, result: Result[T, E]) -> None:
        state = "SUCCESS" if result.is_success() else "FAILURE"
        logger.log(
            self._log_level,
            "[%s] Completed in %.3fs — %s",
            self._operation,
            time.monotonic() - start,
            state,
        )
