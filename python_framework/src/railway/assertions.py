"""
Test assertions for Result values.

Expressive assert helpers that produce clear failure messages:

    from railway import ResultAssertions

    def test_place_order():
        events = ResultAssertions.assert_success(result)
        assert len(events) == 3

    def test_unknown_code():
        error = ResultAssertions.assert_failure(result, ProductCodeNotFound)
        assert error.product_code == "W9999"
"""

from __future__ import annotations

from typing import Any, TypeVar

from railway.failure import ErrorCode, FailureDescription
from railway.result import Result

T = TypeVar("T")
E = TypeVar("E")


class ResultAssertions:
    """Expressive test assertions for Result values."""

    @staticmethod
    def assert_success(result: Result[T, E], message: str = "") -> T:
        """
        Assert the Result is a Success and return the value.

            value = ResultAssertions.assert_success(result)
        """
        context = f" — {message}" if message else ""
        assert result.is_success(), (
            f"Expected Success but got Failure({result.error()!r}){context}"
        )
        return result.value()

    @staticmethod
    def assert_failure(
        result: Result[T, E],
        expected: type | ErrorCode | None = None,
        message: str = "",
    ) -> E:
        """
        Assert the Result is a Failure and return the error.

        `expected` may be an error class (checked with isinstance) or, for
        FailureDescription errors, an ErrorCode.

            error = ResultAssertions.assert_failure(result, AddressNotFound)
            error = ResultAssertions.assert_failure(result, ErrorCode.TIMEOUT_ERROR)
        """
        context = f" — {message}" if message else ""
        assert result.is_failure(), (
            f"Expected Failure but got Success({result.value()!r}){context}"
        )
        error = result.error()
        match expected:
            case None:
                pass
            case ErrorCode():
                assert isinstance(error, FailureDescription) and error.code == expected, (
                    f"Expected error code {expected.value} but got {error!r}{context}"
                )
            case _:
                assert isinstance(error, expected), (
                    f"Expected error of type {expected.__name__} but got {error!r}{context}"
                )
        return error

    @staticmethod
    def assert_failure_equals(result: Result[T, E], expected_error: Any) -> None:
        """Assert the Result is a Failure carrying exactly the expected error value."""
        error = ResultAssertions.assert_failure(result)
        assert error == expected_error, (
            f"Expected failure {expected_error!r} but got {error!r}"
        )

    @staticmethod
    def assert_success_value(result: Result[T, E], expected_value: Any) -> None:
        """Assert the Result is a Success with the specific value."""
        value = ResultAssertions.assert_success(result)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )
