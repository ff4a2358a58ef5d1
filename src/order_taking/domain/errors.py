"""
Error taxonomy — closed unions of frozen dataclasses, one per stage.

Errors are values on the failure track, never raised. Each stage declares
exactly which variants it can return, so callers can `match` them
exhaustively:

  ConstraintError   — a constrained value rejected its raw input
  ValidationError   — ConstraintError + existence checks (code, address)
  PricingError      — unknown product, prices out of range
  ServiceError      — infrastructure failure of a remote capability
  PlaceOrderError   — the workflow-wide wrapper, applied once by map_failure

Infrastructure errors reuse the railway FailureDescription (ErrorCode +
message + exception) so the retry decision is made on `ErrorCode.is_transient`
and never confused with a permanent domain rejection.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from railway import FailureDescription

# ─────────────────────── Constraint errors ───────────────────────


@dataclass(frozen=True, slots=True)
class EmptyString:
    field_name: str

    def __str__(self) -> str:
        return f"{self.field_name} must not be empty"


@dataclass(frozen=True, slots=True)
class TooShort:
    field_name: str
    min_length: int

    def __str__(self) -> str:
        return f"{self.field_name} must have at least {self.min_length} characters"


@dataclass(frozen=True, slots=True)
class TooLong:
    field_name: str
    max_length: int

    def __str__(self) -> str:
        return f"{self.field_name} must not be more than {self.max_length} characters"


@dataclass(frozen=True, slots=True)
class BelowMin:
    field_name: str
    minimum: Decimal | int

    def __str__(self) -> str:
        return f"{self.field_name} must not be less than {self.minimum}"


@dataclass(frozen=True, slots=True)
class AboveMax:
    field_name: str
    maximum: Decimal | int

    def __str__(self) -> str:
        return f"{self.field_name} must not be greater than {self.maximum}"


@dataclass(frozen=True, slots=True)
class PatternMismatch:
    field_name: str
    pattern: str

    def __str__(self) -> str:
        return f"{self.field_name} must match the pattern {self.pattern!r}"


ConstraintError = EmptyString | TooShort | TooLong | BelowMin | AboveMax | PatternMismatch

# ─────────────────────── Validation errors ───────────────────────


@dataclass(frozen=True, slots=True)
class ProductCodeNotFound:
    product_code: str

    def __str__(self) -> str:
        return f"Product code {self.product_code} does not exist"


@dataclass(frozen=True, slots=True)
class AddressNotFound:
    """The address service confirmed the address does not exist."""

    field_name: str = "Address"

    def __str__(self) -> str:
        return f"{self.field_name} not found"


@dataclass(frozen=True, slots=True)
class AddressInvalidFormat:
    """The address service rejected the address as malformed."""

    reason: str
    field_name: str = "Address"

    def __str__(self) -> str:
        return f"{self.field_name} has an invalid format: {self.reason}"


@dataclass(frozen=True, slots=True)
class NoOrderLines:
    def __str__(self) -> str:
        return "An order must have at least one order line"


@dataclass(frozen=True, slots=True)
class LineValidationErrors:
    """Every line error of one order, in line order (collect-all policy)."""

    errors: tuple[ValidationError, ...]

    def __str__(self) -> str:
        return "; ".join(str(e) for e in self.errors)


ValidationError = (
    ConstraintError
    | ProductCodeNotFound
    | AddressNotFound
    | AddressInvalidFormat
    | NoOrderLines
    | LineValidationErrors
)

# ─────────────────────── Pricing errors ───────────────────────


@dataclass(frozen=True, slots=True)
class ProductNotPriced:
    product_code: str

    def __str__(self) -> str:
        return f"No price found for product {self.product_code}"


@dataclass(frozen=True, slots=True)
class LinePriceOutOfRange:
    order_line_id: str
    error: ConstraintError

    def __str__(self) -> str:
        return f"Line {self.order_line_id}: {self.error}"


@dataclass(frozen=True, slots=True)
class BillingAmountOutOfRange:
    error: ConstraintError

    def __str__(self) -> str:
        return str(self.error)


PricingError = ProductNotPriced | LinePriceOutOfRange | BillingAmountOutOfRange

# ─────────────────────── Infrastructure errors ───────────────────────


@dataclass(frozen=True, slots=True)
class ServiceInfo:
    name: str
    endpoint: str


@dataclass(frozen=True, slots=True)
class ServiceError:
    """A remote capability failed for a technical reason (timeout, auth, 5xx, network)."""

    service: ServiceInfo
    failure: FailureDescription

    @property
    def retryable(self) -> bool:
        return self.failure.code.is_transient

    def __str__(self) -> str:
        return f"{self.service.name}: [{self.failure.code.value}] {self.failure.message}"


AddressCheckError = AddressNotFound | AddressInvalidFormat | ServiceError

# ─────────────────────── Workflow error ───────────────────────


@dataclass(frozen=True, slots=True)
class ValidationFailed:
    error: ValidationError


@dataclass(frozen=True, slots=True)
class PricingFailed:
    error: PricingError


@dataclass(frozen=True, slots=True)
class RemoteServiceFailed:
    error: ServiceError


PlaceOrderError = ValidationFailed | PricingFailed | RemoteServiceFailed
