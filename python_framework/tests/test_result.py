"""
Comprehensive tests for the Result monad.

Tests cover:
  - Success/Failure creation and introspection
  - map, map_failure, flat_map, ensure transformations
  - Side effects (peek, peek_failure)
  - Recovery (recover, get_or_else, get_or_else_get)
  - Static factories (from_computation, from_optional, combine, all_of, collect_all)
  - Pattern matching (match/case)
  - Equality, hashing and repr
  - Async operations (map_async, flat_map_async, gather)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import pytest

from railway import ErrorCode, FailureDescription, Result, Success, Failure


@dataclass(frozen=True)
class Rejected:
    reason: str


@dataclass(frozen=True)
class Wrapped:
    inner: Rejected


# ═══════════════════════════════════════════════════════════════
# 1. Creation & Introspection
# ═══════════════════════════════════════════════════════════════


class TestSuccessCreation:
    def test_success_wraps_value(self):
        result = Result.success(42)
        assert result.is_success()
        assert not result.is_failure()
        assert result.value() == 42

    def test_success_with_falsy_value(self):
        assert Result.success(0).value() == 0
        assert Result.success("").value() == ""

    def test_success_with_complex_object(self):
        data = {"name": "Alice", "age": 30}
        result = Result.success(data)
        assert result.value() == data

    def test_success_rejects_none(self):
        with pytest.raises(TypeError, match="must not be None"):
            Success(None)

    def test_success_is_truthy(self):
        assert Result.success(42)
        assert bool(Result.success("x"))


class TestFailureCreation:
    def test_failure_wraps_domain_error(self):
        result = Result.failure(Rejected("Name is required"))
        assert result.is_failure()
        assert not result.is_success()
        assert result.error() == Rejected("Name is required")

    def test_failure_wraps_failure_description(self):
        desc = FailureDescription(ErrorCode.NOT_FOUND, "User not found")
        result = Result.failure(desc)
        assert result.error() is desc

    def test_failure_rejects_none(self):
        with pytest.raises(TypeError, match="must not be None"):
            Failure(None)

    def test_failure_is_falsy(self):
        assert not Result.failure(Rejected("bad"))


class TestValueExtraction:
    def test_value_on_failure_raises(self):
        result = Result.failure(Rejected("missing"))
        with pytest.raises(ValueError, match="Cannot get value from a Failure"):
            result.value()

    def test_error_on_success_raises(self):
        result = Result.success(42)
        with pytest.raises(ValueError, match="Cannot get error from a Success"):
            result.error()


# ═══════════════════════════════════════════════════════════════
# 2. Transformations
# ═══════════════════════════════════════════════════════════════


class TestMap:
    def test_map_transforms_success_value(self):
        result = Result.success(5).map(lambda x: x * 2)
        assert result.value() == 10

    def test_map_short_circuits_on_failure(self):
        calls: list[int] = []
        result = Result.failure(Rejected("bad")).map(lambda x: calls.append(x))
        assert result.error() == Rejected("bad")
        assert calls == []

    def test_map_chain(self):
        result = (
            Result.success(3)
            .map(lambda x: x + 1)
            .map(lambda x: x * 2)
            .map(str)
        )
        assert result.value() == "8"


class TestMapFailure:
    def test_map_failure_transforms_error(self):
        result = Result.failure(Rejected("original")).map_failure(Wrapped)
        assert result.error() == Wrapped(Rejected("original"))

    def test_map_failure_passes_through_success(self):
        result = Result.success(42).map_failure(Wrapped)
        assert result.value() == 42

    def test_map_failure_unifies_error_types_before_chaining(self):
        def stage_a(x: int) -> Result[int, Rejected]:
            return Result.failure(Rejected("a failed"))

        result = stage_a(1).map_failure(Wrapped).flat_map(lambda x: Result.success(x + 1))
        assert result.error() == Wrapped(Rejected("a failed"))


class TestFlatMap:
    def test_flat_map_chains_success(self):
        def double_if_positive(x: int) -> Result[int, Rejected]:
            if x > 0:
                return Result.success(x * 2)
            return Result.failure(Rejected("Must be positive"))

        assert Result.success(5).flat_map(double_if_positive).value() == 10
        assert Result.success(-5).flat_map(double_if_positive).error() == Rejected("Must be positive")

    def test_flat_map_short_circuits_on_first_failure(self):
        calls: list[str] = []

        def step_a(x: int) -> Result[int, Rejected]:
            calls.append("a")
            return Result.failure(Rejected("fail at a"))

        def step_b(x: int) -> Result[int, Rejected]:
            calls.append("b")
            return Result.success(x + 1)

        result = Result.success(1).flat_map(step_a).flat_map(step_b)
        assert result.error() == Rejected("fail at a")
        assert calls == ["a"]

    def test_flat_map_pipeline(self):
        """Full railway pipeline — the core pattern."""
        def validate(order: dict) -> Result[dict, Rejected]:
            if order.get("total", 0) <= 0:
                return Result.failure(Rejected("Total must be positive"))
            return Result.success(order)

        def enrich(order: dict) -> Result[dict, Rejected]:
            return Result.success({**order, "status": "enriched"})

        def persist(order: dict) -> Result[str, Rejected]:
            return Result.success(f"ORDER-{order['id']}")

        result = (
            Result.success({"id": 1, "total": 100})
            .flat_map(validate)
            .flat_map(enrich)
            .flat_map(persist)
        )
        assert result.value() == "ORDER-1"


class TestEnsure:
    def test_ensure_passes_when_predicate_true(self):
        result = Result.success(10).ensure(lambda x: x > 0, Rejected("Must be positive"))
        assert result.value() == 10

    def test_ensure_fails_when_predicate_false(self):
        result = Result.success(-1).ensure(lambda x: x > 0, Rejected("Must be positive"))
        assert result.error() == Rejected("Must be positive")

    def test_ensure_short_circuits_on_existing_failure(self):
        result = Result.failure(Rejected("missing")).ensure(lambda x: True, Rejected("never reached"))
        assert result.error() == Rejected("missing")

    def test_ensure_chain(self):
        result = (
            Result.success(50)
            .ensure(lambda x: x > 0, Rejected("positive"))
            .ensure(lambda x: x < 100, Rejected("under 100"))
            .ensure(lambda x: x % 2 == 0, Rejected("even"))
        )
        assert result.value() == 50


# ═══════════════════════════════════════════════════════════════
# 3. Either / Pattern Matching
# ═══════════════════════════════════════════════════════════════


class TestEither:
    def test_either_on_success(self):
        msg = Result.success("Alice").either(
            on_success=lambda name: f"Hello, {name}!",
            on_failure=lambda err: f"Error: {err.reason}",
        )
        assert msg == "Hello, Alice!"

    def test_either_on_failure(self):
        msg = Result.failure(Rejected("not found")).either(
            on_success=lambda v: f"Got: {v}",
            on_failure=lambda err: f"Error: {err.reason}",
        )
        assert msg == "Error: not found"


class TestPatternMatching:
    def test_match_success(self):
        match Result.success(42):
            case Success(v):
                assert v == 42
            case Failure(_):
                pytest.fail("Should be Success")

    def test_match_failure_on_error_variant(self):
        match Result.failure(Rejected("bad")):
            case Success(_):
                pytest.fail("Should be Failure")
            case Failure(Rejected(reason=reason)):
                assert reason == "bad"

    def test_match_in_function(self):
        def describe(result: Result[int, Rejected]) -> str:
            match result:
                case Success(v):
                    return f"Got {v}"
                case Failure(err):
                    return f"Failed: {err.reason}"
            return "unreachable"

        assert describe(Result.success(7)) == "Got 7"
        assert describe(Result.failure(Rejected("nope"))) == "Failed: nope"


# ═══════════════════════════════════════════════════════════════
# 4. Side Effects
# ═══════════════════════════════════════════════════════════════


class TestPeek:
    def test_peek_executes_on_success(self):
        captured: list[int] = []
        result = Result.success(42).peek(lambda v: captured.append(v))
        assert captured == [42]
        assert result.value() == 42

    def test_peek_skips_on_failure(self):
        captured: list[int] = []
        Result.failure(Rejected("nope")).peek(lambda v: captured.append(v))
        assert captured == []

    def test_peek_failure_executes_on_failure(self):
        captured: list[str] = []
        Result.failure(Rejected("gone")).peek_failure(lambda err: captured.append(err.reason))
        assert captured == ["gone"]

    def test_peek_failure_skips_on_success(self):
        captured: list[str] = []
        Result.success(42).peek_failure(lambda err: captured.append(err.reason))
        assert captured == []


# ═══════════════════════════════════════════════════════════════
# 5. Recovery
# ═══════════════════════════════════════════════════════════════


class TestRecovery:
    def test_recover_from_failure(self):
        result = Result.failure(Rejected("missing")).recover(lambda err: "default")
        assert result.value() == "default"

    def test_recover_passes_through_success(self):
        result = Result.success(42).recover(lambda err: 0)
        assert result.value() == 42

    def test_get_or_else_on_failure(self):
        assert Result.failure(Rejected("x")).get_or_else("fallback") == "fallback"

    def test_get_or_else_on_success(self):
        assert Result.success("actual").get_or_else("fallback") == "actual"

    def test_get_or_else_get(self):
        value = Result.failure(Rejected("x")).get_or_else_get(lambda err: f"recovered from {err.reason}")
        assert value == "recovered from x"


# ═══════════════════════════════════════════════════════════════
# 6. Static Factories
# ═══════════════════════════════════════════════════════════════


class TestFromComputation:
    def test_success_when_no_exception(self):
        result = Result.from_computation(lambda: 42, ErrorCode.TECHNICAL_ERROR, "computation failed")
        assert result.value() == 42

    def test_failure_when_exception_raised(self):
        result = Result.from_computation(lambda: 1 / 0, ErrorCode.TECHNICAL_ERROR, "division error")
        error = result.error()
        assert error.code == ErrorCode.TECHNICAL_ERROR
        assert error.message == "division error"
        assert isinstance(error.exception, ZeroDivisionError)

    @pytest.mark.asyncio
    async def test_async_success_when_no_exception(self):
        async def fetch() -> int:
            return 7

        result = await Result.from_computation_async(fetch, ErrorCode.EXTERNAL_SERVICE_ERROR, "fetch failed")
        assert result.value() == 7

    @pytest.mark.asyncio
    async def test_async_failure_when_exception_raised(self):
        async def fetch() -> int:
            raise ConnectionError("refused")

        result = await Result.from_computation_async(fetch, ErrorCode.EXTERNAL_SERVICE_ERROR, "fetch failed")
        assert result.error().code == ErrorCode.EXTERNAL_SERVICE_ERROR
        assert isinstance(result.error().exception, ConnectionError)


class TestFromOptional:
    def test_success_when_value_present(self):
        assert Result.from_optional("hello", Rejected("required")).value() == "hello"

    def test_failure_when_none(self):
        assert Result.from_optional(None, Rejected("required")).error() == Rejected("required")

    def test_falsy_value_is_present(self):
        assert Result.from_optional(0, Rejected("required")).value() == 0


class TestCombine:
    def test_combine_two_successes(self):
        result = Result.combine(
            Result.success("Alice"),
            Result.success(30),
            lambda name, age: f"{name} is {age}",
        )
        assert result.value() == "Alice is 30"

    def test_combine_first_fails(self):
        result = Result.combine(
            Result.failure(Rejected("bad name")),
            Result.failure(Rejected("bad age")),
            lambda name, age: f"{name} is {age}",
        )
        assert result.error() == Rejected("bad name")

    def test_combine_second_fails(self):
        result = Result.combine(
            Result.success("Alice"),
            Result.failure(Rejected("bad age")),
            lambda name, age: f"{name} is {age}",
        )
        assert result.error() == Rejected("bad age")

    def test_combine_three(self):
        result = Result.combine3(
            Result.success("a"),
            Result.success("b"),
            Result.success("c"),
            lambda a, b, c: f"{a}-{b}-{c}",
        )
        assert result.value() == "a-b-c"


class TestAllOf:
    def test_all_successes(self):
        combined = Result.all_of([Result.success(i) for i in range(5)])
        assert combined.value() == [0, 1, 2, 3, 4]

    def test_first_failure_wins(self):
        combined = Result.all_of(
            [
                Result.success(1),
                Result.failure(Rejected("second fails")),
                Result.failure(Rejected("third fails")),
            ]
        )
        assert combined.error() == Rejected("second fails")

    def test_accepts_generator(self):
        combined = Result.all_of(Result.success(i) for i in range(3))
        assert combined.value() == [0, 1, 2]

    def test_empty_list(self):
        assert Result.all_of([]).value() == []


class TestCollectAll:
    def test_all_successes(self):
        assert Result.collect_all([Result.success(1), Result.success(2)]).value() == [1, 2]

    def test_every_failure_kept_in_order(self):
        combined = Result.collect_all(
            [
                Result.failure(Rejected("first")),
                Result.success(2),
                Result.failure(Rejected("third")),
            ]
        )
        assert combined.error() == [Rejected("first"), Rejected("third")]

    def test_empty_list(self):
        assert Result.collect_all([]).value() == []


# ═══════════════════════════════════════════════════════════════
# 7. Equality & Repr
# ═══════════════════════════════════════════════════════════════


class TestEqualityAndRepr:
    def test_success_equality(self):
        assert Result.success(42) == Result.success(42)
        assert Result.success(42) != Result.success(99)

    def test_failure_equality(self):
        assert Result.failure(Rejected("x")) == Result.failure(Rejected("x"))
        assert Result.failure(Rejected("x")) != Result.failure(Rejected("y"))

    def test_failure_description_equality_ignores_timestamp_and_exception(self):
        a = Result.failure(FailureDescription(ErrorCode.NOT_FOUND, "x", ValueError("a")))
        b = Result.failure(FailureDescription(ErrorCode.NOT_FOUND, "x"))
        assert a == b

    def test_success_not_equal_to_failure(self):
        assert Result.success(42) != Result.failure(Rejected("x"))

    def test_results_are_hashable(self):
        assert len({Result.success(1), Result.success(1), Result.failure(Rejected("x"))}) == 2

    def test_collected_failures_are_hashable(self):
        combined = Result.collect_all([Result.failure(Rejected("a"))])
        assert hash(combined) == hash(Result.collect_all([Result.failure(Rejected("a"))]))

    def test_repr_success(self):
        assert repr(Result.success(42)) == "Success(42)"

    def test_repr_failure(self):
        r = repr(Result.failure(Rejected("gone")))
        assert r.startswith("Failure(")
        assert "gone" in r


# ═══════════════════════════════════════════════════════════════
# 8. Async Operations
# ═══════════════════════════════════════════════════════════════


class TestAsync:
    @pytest.mark.asyncio
    async def test_map_async_success(self):
        async def double(x: int) -> int:
            return x * 2

        result = await Result.success(5).map_async(double)
        assert result.value() == 10

    @pytest.mark.asyncio
    async def test_map_async_failure_passthrough(self):
        calls: list[int] = []

        async def record(x: int) -> int:
            calls.append(x)
            return x

        result = await Result.failure(Rejected("x")).map_async(record)
        assert result.error() == Rejected("x")
        assert calls == []

    @pytest.mark.asyncio
    async def test_flat_map_async_success(self):
        async def validate(x: int) -> Result[int, Rejected]:
            if x > 0:
                return Result.success(x)
            return Result.failure(Rejected("negative"))

        assert (await Result.success(5).flat_map_async(validate)).value() == 5
        assert (await Result.success(-5).flat_map_async(validate)).error() == Rejected("negative")

    @pytest.mark.asyncio
    async def test_flat_map_async_never_calls_mapper_on_failure(self):
        calls: list[int] = []

        async def record(x: int) -> Result[int, Rejected]:
            calls.append(x)
            return Result.success(x)

        result = await Result.failure(Rejected("early")).flat_map_async(record)
        assert result.error() == Rejected("early")
        assert calls == []

    @pytest.mark.asyncio
    async def test_flat_map_async_propagates_exception(self):
        async def failing(x: int) -> Result[int, Rejected]:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await Result.success(5).flat_map_async(failing)


class TestGather:
    @pytest.mark.asyncio
    async def test_gather_all_successes_keeps_input_order(self):
        async def delayed(value: int, delay: float) -> Result[int, Rejected]:
            await asyncio.sleep(delay)
            return Result.success(value)

        result = await Result.gather([delayed(1, 0.02), delayed(2, 0.0)])
        assert result.value() == [1, 2]

    @pytest.mark.asyncio
    async def test_gather_runs_concurrently(self):
        started: list[str] = []
        release = asyncio.Event()

        async def first() -> Result[str, Rejected]:
            started.append("first")
            await release.wait()
            return Result.success("first")

        async def second() -> Result[str, Rejected]:
            started.append("second")
            release.set()
            return Result.success("second")

        result = await asyncio.wait_for(Result.gather([first(), second()]), timeout=1)
        assert result.value() == ["first", "second"]
        assert started == ["first", "second"]

    @pytest.mark.asyncio
    async def test_gather_first_failure_in_input_order(self):
        async def fail_slowly() -> Result[int, Rejected]:
            await asyncio.sleep(0.02)
            return Result.failure(Rejected("slow"))

        async def fail_fast() -> Result[int, Rejected]:
            return Result.failure(Rejected("fast"))

        result = await Result.gather([fail_slowly(), fail_fast()])
        assert result.error() == Rejected("slow")

    @pytest.mark.asyncio
    async def test_gather_collects_every_failure(self):
        async def fail(reason: str) -> Result[int, Rejected]:
            return Result.failure(Rejected(reason))

        result = await Result.gather([fail("a"), fail("b")], collect_errors=True)
        assert result.error() == [Rejected("a"), Rejected("b")]
