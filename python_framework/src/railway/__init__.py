"""
Railway-Oriented Programming (ROP) Framework for Python.

Explicit, composable, functional error handling — no exceptions in business logic.

    from railway import Result

    def validate_quantity(raw: int) -> Result[int, str]:
        if raw < 1:
            return Result.failure("quantity must be at least 1")
        return Result.success(raw)

    result = (
        Result.success({"code": "W1234", "quantity": 3})
        .flat_map(lambda d: validate_quantity(d["quantity"]))
        .map(lambda qty: f"{qty} units")
    )
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
)
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ResultAssertions",
]

__version__ = "2.0.0"
