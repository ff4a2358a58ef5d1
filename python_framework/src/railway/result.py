"""
Result monad — the core of Railway-Oriented Programming.

A Result[T, E] is either Success(value: T) or Failure(error: E). Stages return
Result instead of raising for expected failures, and failures propagate through
the failure track via .flat_map() short-circuiting.

    ┌───────────┐   flat_map    ┌───────────┐   flat_map    ┌──────────┐
    │ validate  │──Success──────│   price   │──Success──────│   emit   │──→ Result[T, E]
    │           │               │           │               │          │
    └─────┬─────┘               └─────┬─────┘               └─────┬────┘
          │ Failure                   │ Failure                   │ Failure
          └───────────────────────────┴───────────────────────────┴──→ Result[T, E]

The error type E is whatever the stage declares: a closed union of frozen
dataclasses for domain errors, or FailureDescription for technical ones.
Stages with different error types are joined with .map_failure() before
being chained.

Asynchrony layers on top: the *_async combinators and Result.gather() take
awaitables and still return a plain Result, so a suspending call composes
exactly like a synchronous one. They never catch exceptions: an exception is
a fatal condition, not a value on the failure track.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    List,
    Optional,
    TypeVar,
)

from railway.failure import ErrorCode, FailureDescription

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
R = TypeVar("R")


class Result(Generic[T, E]):
    """
    Railway-Oriented Programming Result monad.

    Two possible states:
      - Success(value: T) — the happy path
      - Failure(error: E) — the error track

    All transformations short-circuit on failure, so you only write
    the success path and errors propagate automatically.

    Usage:
        >>> Result.success(42).map(lambda x: x * 2).value()
        84

        >>> Result.failure("bad input").map(lambda x: x * 2).is_failure()
        True
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        return isinstance(self, Failure)

    def value(self) -> T:
        """
        Extract the success value. Raises ValueError if called on a Failure.

        Prefer .either() or match/case for safe access.
        """
        match self:
            case Success(v):
                return v
            case Failure(err):
                raise ValueError(f"Cannot get value from a Failure: {err!r}")
        raise TypeError("unreachable")  # pragma: no cover

    def error(self) -> E:
        """
        Extract the error. Raises ValueError if called on a Success.

        Prefer .either() or match/case for safe access.
        """
        match self:
            case Failure(err):
                return err
            case Success(v):
                raise ValueError(f"Cannot get error from a Success: {v!r}")
        raise TypeError("unreachable")  # pragma: no cover

    # ──────────────────────── Core Transformations ────────────────────────

    def either(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[E], R],
    ) -> R:
        """
        Apply one of two functions depending on the state.

            result.either(
                on_success=lambda events: len(events),
                on_failure=lambda err: 0,
            )
        """
        match self:
            case Success(v):
                return on_success(v)
            case Failure(err):
                return on_failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map(self, mapper: Callable[[T], U]) -> Result[U, E]:
        """
        Transform the success value. Short-circuits on failure.

            Result.success(5).map(lambda x: x * 2)   # → Success(10)
            Result.failure(e).map(lambda x: x * 2)   # → same Failure
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def map_failure(self, mapper: Callable[[E], F]) -> Result[T, F]:
        """
        Transform the error. Passes success through unchanged.

        This is how two stages with different error types are unified
        before composition:

            validate(order).map_failure(ValidationFailed).flat_map(price)
        """
        match self:
            case Success(v):
                return Success(v)
            case Failure(err):
                return Failure(mapper(err))
        raise TypeError("unreachable")  # pragma: no cover

    def flat_map(self, mapper: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """
        Chain a Result-returning function. Short-circuits on failure.

        This is the KEY operator of ROP — it turns a "switch" function (one
        that can itself fail) into a link of the railway. Also known as bind,
        >>= or and_then.

            Result.success(5).flat_map(validate)   # → Success(5)
            Result.success(-1).flat_map(validate)  # → Failure(...)
        """
        match self:
            case Success(v):
                return mapper(v)
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    def ensure(self, predicate: Callable[[T], bool], error: E) -> Result[T, E]:
        """
        Validate the success value against a condition.
        Short-circuits on existing failure.

            Result.success(lines).ensure(bool, NoOrderLines())
        """
        return self.flat_map(lambda v: Success(v) if predicate(v) else Failure(error))

    # ──────────────────────── Side Effects ────────────────────────

    def peek(self, action: Callable[[T], Any]) -> Result[T, E]:
        """
        Execute a side effect on the success value without altering the Result.

            result.peek(lambda events: log.info("place_order.completed", count=len(events)))
        """
        match self:
            case Success(v):
                action(v)
        return self

    def peek_failure(self, action: Callable[[E], Any]) -> Result[T, E]:
        """Execute a side effect on failure without altering the Result."""
        match self:
            case Failure(err):
                action(err)
        return self

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[E], T]) -> Result[T, E]:
        """Recover from failure by producing a success value."""
        match self:
            case Success(_):
                return self
            case Failure(err):
                return Success(recovery_fn(err))
        raise TypeError("unreachable")  # pragma: no cover

    def get_or_else(self, default: T) -> T:
        """Extract value or return a default on failure."""
        match self:
            case Success(v):
                return v
            case _:
                return default

    def get_or_else_get(self, fallback: Callable[[E], T]) -> T:
        """Extract value or compute a default from the error."""
        return self.either(lambda v: v, fallback)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T) -> Result[T, Any]:
        """Create a successful Result wrapping the given value."""
        return Success(value)

    @staticmethod
    def failure(error: E) -> Result[Any, E]:
        """Create a failed Result carrying the given error value."""
        return Failure(error)

    @staticmethod
    def from_computation(
        computation: Callable[[], T],
        error_code: ErrorCode,
        error_message: str,
    ) -> Result[T, FailureDescription]:
        """
        Create a Result from a computation that may raise.

        Wraps exceptions into a FailureDescription — the boundary where an
        adapter turns a library exception into a value:

            Result.from_computation(
                lambda: client.post(url, json=body),
                ErrorCode.EXTERNAL_SERVICE_ERROR,
                "Mail service call failed",
            )
        """
        try:
            return Success(computation())
        except Exception as e:
            return Failure(FailureDescription(error_code, error_message, e))

    @staticmethod
    async def from_computation_async(
        computation: Callable[[], Awaitable[T]],
        error_code: ErrorCode,
        error_message: str,
    ) -> Result[T, FailureDescription]:
        """Async counterpart of from_computation()."""
        try:
            return Success(await computation())
        except Exception as e:
            return Failure(FailureDescription(error_code, error_message, e))

    @staticmethod
    def from_optional(value: Optional[T], error: E) -> Result[T, E]:
        """
        Create a Result from an Optional/None value.

            Result.from_optional(catalog.get(code), ProductNotPriced(code))
        """
        if value is not None:
            return Success(value)
        return Failure(error)

    @staticmethod
    def combine(
        ra: Result[A, E],
        rb: Result[B, E],
        combiner: Callable[[A, B], R],
    ) -> Result[R, E]:
        """
        Combine two Results. Both must succeed; the first failure wins.

            Result.combine(
                String50.create(first, "FirstName"),
                String50.create(last, "LastName"),
                PersonalName,
            )
        """
        return ra.flat_map(lambda a: rb.map(lambda b: combiner(a, b)))

    @staticmethod
    def combine3(
        ra: Result[A, E],
        rb: Result[B, E],
        rc: Result[C, E],
        combiner: Callable[[A, B, C], R],
    ) -> Result[R, E]:
        """Combine three Results. All must succeed."""
        return ra.flat_map(lambda a: rb.flat_map(lambda b: rc.map(lambda c: combiner(a, b, c))))

    @staticmethod
    def all_of(results: Iterable[Result[T, E]]) -> Result[List[T], E]:
        """
        Sequence a list of Results into a Result of list — fail-fast.

        Returns the first failure in list order, or Success with all values.

            Result.all_of([validate_line(line) for line in lines])
        """
        values: list[T] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure(err):
                    return Failure(err)
        return Success(values)

    @staticmethod
    def collect_all(results: Iterable[Result[T, E]]) -> Result[List[T], List[E]]:
        """
        Sequence a list of Results into a Result of list — aggregating.

        Unlike all_of(), every failure is kept: the failure track carries the
        list of all errors, in input order.

            Result.collect_all([validate_line(line) for line in lines])
        """
        values: list[T] = []
        errors: list[E] = []
        for r in results:
            match r:
                case Success(v):
                    values.append(v)
                case Failure(err):
                    errors.append(err)
        if errors:
            return Failure(errors)
        return Success(values)

    # ──────────────────────── Async Support ────────────────────────

    async def map_async(self, mapper: Callable[[T], Awaitable[U]]) -> Result[U, E]:
        """
        Async map — apply an async function to the success value.

            result = await priced.map_async(acknowledge)
        """
        match self:
            case Success(v):
                return Success(await mapper(v))
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    async def flat_map_async(self, mapper: Callable[[T], Awaitable[Result[U, E]]]) -> Result[U, E]:
        """
        Async flat_map — chain an async Result-returning function.
        The mapper is never awaited (never even called) on the failure track.

            result = await header.flat_map_async(lambda _: check_addresses(order))
        """
        match self:
            case Success(v):
                return await mapper(v)
            case Failure(err):
                return Failure(err)
        raise TypeError("unreachable")  # pragma: no cover

    @staticmethod
    async def gather(
        awaitables: Iterable[Awaitable[Result[T, E]]],
        collect_errors: bool = False,
    ) -> Result[List[T], Any]:
        """
        Run independent Result-returning awaitables concurrently, then sequence them.

        All awaitables are scheduled with asyncio.gather, so independent remote
        calls overlap. The join is deterministic: with collect_errors=False the
        failure is the first one *in input order* (all_of); with
        collect_errors=True it is the list of every failure (collect_all).

            await Result.gather([check(shipping), check(billing)])
        """
        results = await asyncio.gather(*awaitables)
        if collect_errors:
            return Result.collect_all(results)
        return Result.all_of(results)

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """Allow truthiness check: `if result: ...` succeeds only on Success."""
        return self.is_success()


@dataclass(frozen=True, slots=True)
class Success(Result[T, E]):
    """The success track — wraps a value of type T."""

    _value: T

    def __init__(self, value: T) -> None:
        if value is None:
            raise TypeError("Success value must not be None")
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self._value == other._value
        if isinstance(other, Failure):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Success", self._value))


# Enable structural pattern matching: case Success(value)
Success.__match_args__ = ("_value",)


@dataclass(frozen=True, slots=True)
class Failure(Result[T, E]):
    """The failure track — wraps an error value of type E."""

    _error: E

    def __init__(self, error: E) -> None:
        if error is None:
            raise TypeError("Failure error must not be None")
        object.__setattr__(self, "_error", error)

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self._error == other._error
        if isinstance(other, Success):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Failure", _hashable(self._error)))


# Enable structural pattern matching: case Failure(error)
Failure.__match_args__ = ("_error",)


def _hashable(error: Any) -> Any:
    # collect_all() puts a list on the failure track
    if isinstance(error, list):
        return tuple(error)
    return error
