"""
Constrained simple types — smart constructors for primitive-wrapped domain values.

Every type is a frozen dataclass wrapping one value. The public way to build
one is `create(raw, field_name)`, which returns Result[T, ConstraintError]
and never raises for bad input:

    OrderId.create("")          → Failure(EmptyString("OrderId"))
    OrderId.create("x" * 51)    → Failure(TooLong("OrderId", 50))
    OrderId.create("ord-1")     → Success(OrderId("ord-1"))

`__post_init__` re-checks the same invariant, so constructing a type directly
with an invalid value raises ValueError. Downstream code can therefore trust
any instance it receives.

Two types are unions whose variant is decided at construction:
  ProductCode   = WidgetCode ("W" + 4 digits) | GizmoCode ("G" + 3 digits)
  OrderQuantity = UnitQuantity (1..1000)      | KilogramQuantity (0.05..100.00)
and the quantity variant follows the product code variant.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import TypeVar

from railway import Result

from order_taking.domain.errors import (
    AboveMax,
    BelowMin,
    ConstraintError,
    EmptyString,
    PatternMismatch,
    TooLong,
    TooShort,
)

_CENTS = Decimal("0.01")

# ─────────────────────── Shared checks ───────────────────────


def check_string(
    raw: object, field_name: str, max_length: int, min_length: int = 1
) -> ConstraintError | None:
    """Return the first constraint a raw string breaks, or None."""
    if raw is not None and not isinstance(raw, str):
        return PatternMismatch(field_name, "string")
    if raw is None or not raw.strip():
        return EmptyString(field_name)
    if len(raw) < min_length:
        return TooShort(field_name, min_length)
    if len(raw) > max_length:
        return TooLong(field_name, max_length)
    return None


def check_pattern(raw: object, field_name: str, pattern: str) -> ConstraintError | None:
    if raw is not None and not isinstance(raw, str):
        return PatternMismatch(field_name, pattern)
    if raw is None or not raw.strip():
        return EmptyString(field_name)
    if re.fullmatch(pattern, raw) is None:
        return PatternMismatch(field_name, pattern)
    return None


def check_range(
    value: Decimal | int, field_name: str, minimum: Decimal | int, maximum: Decimal | int
) -> ConstraintError | None:
    if value < minimum:
        return BelowMin(field_name, minimum)
    if value > maximum:
        return AboveMax(field_name, maximum)
    return None


def to_decimal(raw: Decimal | int | float | str | None) -> Decimal | None:
    """Parse a raw number; None for anything that is not a finite number."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _strip(raw: object) -> object:
    return raw.strip() if isinstance(raw, str) else raw


def _to_cents(value: Decimal) -> Decimal:
    """Round to cents. Only call on range-checked values; huge ones overflow the context."""
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def _guard(error: ConstraintError | None) -> None:
    if error is not None:
        raise ValueError(str(error))


T = TypeVar("T")


def _build(ctor: Callable[..., T], value: object, error: ConstraintError | None) -> Result[T, ConstraintError]:
    if error is not None:
        return Result.failure(error)
    return Result.success(ctor(value))


# ─────────────────────── Strings ───────────────────────


@dataclass(frozen=True, slots=True)
class String50:
    """A non-empty string of at most 50 characters."""

    value: str

    def __post_init__(self) -> None:
        _guard(check_string(self.value, "String50", 50))

    @staticmethod
    def create(raw: str | None, field_name: str = "String50") -> Result[String50, ConstraintError]:
        value = _strip(raw)
        return _build(String50, value, check_string(value, field_name, 50))


@dataclass(frozen=True, slots=True)
class EmailAddress:
    value: str

    PATTERN = r".+@.+"

    def __post_init__(self) -> None:
        _guard(check_pattern(self.value, "EmailAddress", self.PATTERN))

    @staticmethod
    def create(raw: str | None, field_name: str = "EmailAddress") -> Result[EmailAddress, ConstraintError]:
        value = _strip(raw)
        return _build(EmailAddress, value, check_pattern(value, field_name, EmailAddress.PATTERN))


@dataclass(frozen=True, slots=True)
class ZipCode:
    """A five-digit US zip code."""

    value: str

    LENGTH = 5
    PATTERN = r"\d{5}"

    def __post_init__(self) -> None:
        _guard(ZipCode.check(self.value, "ZipCode"))

    @staticmethod
    def check(raw: object, field_name: str) -> ConstraintError | None:
        return check_string(raw, field_name, ZipCode.LENGTH, min_length=ZipCode.LENGTH) or check_pattern(
            raw, field_name, ZipCode.PATTERN
        )

    @staticmethod
    def create(raw: str | None, field_name: str = "ZipCode") -> Result[ZipCode, ConstraintError]:
        value = _strip(raw)
        return _build(ZipCode, value, ZipCode.check(value, field_name))


@dataclass(frozen=True, slots=True)
class UsStateCode:
    """A two-letter US state or district code."""

    value: str

    PATTERN = (
        r"A[KLRZ]|C[AOT]|D[CE]|FL|GA|HI|I[ADLN]|K[SY]|LA|M[ADEINOST]|N[CDEHJMVY]"
        r"|O[HKR]|P[AR]|RI|S[CD]|T[NX]|UT|V[AIT]|W[AIVY]"
    )

    def __post_init__(self) -> None:
        _guard(check_pattern(self.value, "UsStateCode", self.PATTERN))

    @staticmethod
    def create(raw: str | None, field_name: str = "UsStateCode") -> Result[UsStateCode, ConstraintError]:
        value = _strip(raw)
        return _build(UsStateCode, value, check_pattern(value, field_name, UsStateCode.PATTERN))


@dataclass(frozen=True, slots=True)
class OrderId:
    value: str

    def __post_init__(self) -> None:
        _guard(check_string(self.value, "OrderId", 50))

    @staticmethod
    def create(raw: str | None, field_name: str = "OrderId") -> Result[OrderId, ConstraintError]:
        value = _strip(raw)
        return _build(OrderId, value, check_string(value, field_name, 50))


@dataclass(frozen=True, slots=True)
class OrderLineId:
    value: str

    def __post_init__(self) -> None:
        _guard(check_string(self.value, "OrderLineId", 50))

    @staticmethod
    def create(raw: str | None, field_name: str = "OrderLineId") -> Result[OrderLineId, ConstraintError]:
        value = _strip(raw)
        return _build(OrderLineId, value, check_string(value, field_name, 50))


@dataclass(frozen=True, slots=True)
class HtmlString:
    """A rendered HTML document. Unconstrained; produced only by letter renderers."""

    value: str


class VipStatus(Enum):
    NORMAL = "Normal"
    VIP = "VIP"

    @staticmethod
    def create(raw: str | None, field_name: str = "VipStatus") -> Result[VipStatus, ConstraintError]:
        if raw is not None and not isinstance(raw, str):
            return Result.failure(PatternMismatch(field_name, "Normal|VIP"))
        if raw is None or not raw.strip():
            return Result.failure(EmptyString(field_name))
        for status in VipStatus:
            if raw.strip().lower() == status.value.lower():
                return Result.success(status)
        return Result.failure(PatternMismatch(field_name, "Normal|VIP"))


# ─────────────────────── Product codes ───────────────────────


@dataclass(frozen=True, slots=True)
class WidgetCode:
    """Widget product code: "W" followed by 4 digits."""

    value: str

    PATTERN = r"W\d{4}"

    def __post_init__(self) -> None:
        _guard(check_pattern(self.value, "WidgetCode", self.PATTERN))

    @staticmethod
    def create(raw: str | None, field_name: str = "WidgetCode") -> Result[WidgetCode, ConstraintError]:
        value = _strip(raw)
        return _build(WidgetCode, value, check_pattern(value, field_name, WidgetCode.PATTERN))


@dataclass(frozen=True, slots=True)
class GizmoCode:
    """Gizmo product code: "G" followed by 3 digits."""

    value: str

    PATTERN = r"G\d{3}"

    def __post_init__(self) -> None:
        _guard(check_pattern(self.value, "GizmoCode", self.PATTERN))

    @staticmethod
    def create(raw: str | None, field_name: str = "GizmoCode") -> Result[GizmoCode, ConstraintError]:
        value = _strip(raw)
        return _build(GizmoCode, value, check_pattern(value, field_name, GizmoCode.PATTERN))


ProductCode = WidgetCode | GizmoCode


def create_product_code(
    raw: str | None, field_name: str = "ProductCode"
) -> Result[ProductCode, ConstraintError]:
    """Pick the product code variant from the prefix, then validate it."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return Result.failure(EmptyString(field_name))
    code = _strip(raw)
    if isinstance(code, str) and code.startswith("W"):
        return WidgetCode.create(code, field_name)
    if isinstance(code, str) and code.startswith("G"):
        return GizmoCode.create(code, field_name)
    return Result.failure(PatternMismatch(field_name, f"{WidgetCode.PATTERN}|{GizmoCode.PATTERN}"))


# ─────────────────────── Quantities ───────────────────────


@dataclass(frozen=True, slots=True)
class UnitQuantity:
    """Number of units of a widget: an integer from 1 to 1000."""

    value: int

    MIN = 1
    MAX = 1000

    def __post_init__(self) -> None:
        _guard(check_range(self.value, "UnitQuantity", self.MIN, self.MAX))

    @staticmethod
    def create(
        raw: Decimal | int | float | str | None, field_name: str = "UnitQuantity"
    ) -> Result[UnitQuantity, ConstraintError]:
        number = to_decimal(raw)
        if number is None:
            return Result.failure(PatternMismatch(field_name, "integer"))
        error = check_range(number, field_name, UnitQuantity.MIN, UnitQuantity.MAX)
        if error is not None:
            return Result.failure(error)
        if number != number.to_integral_value():
            return Result.failure(PatternMismatch(field_name, "integer"))
        return Result.success(UnitQuantity(int(number)))


@dataclass(frozen=True, slots=True)
class KilogramQuantity:
    """Weight of a gizmo in kilograms: from 0.05 to 100.00."""

    value: Decimal

    MIN = Decimal("0.05")
    MAX = Decimal("100.00")

    def __post_init__(self) -> None:
        _guard(check_range(self.value, "KilogramQuantity", self.MIN, self.MAX))

    @staticmethod
    def create(
        raw: Decimal | int | float | str | None, field_name: str = "KilogramQuantity"
    ) -> Result[KilogramQuantity, ConstraintError]:
        value = to_decimal(raw)
        if value is None:
            return Result.failure(PatternMismatch(field_name, "decimal"))
        return _build(
            KilogramQuantity,
            value,
            check_range(value, field_name, KilogramQuantity.MIN, KilogramQuantity.MAX),
        )


OrderQuantity = UnitQuantity | KilogramQuantity


def create_order_quantity(
    product_code: ProductCode,
    raw: Decimal | int | float | str | None,
    field_name: str = "Quantity",
) -> Result[OrderQuantity, ConstraintError]:
    """Widgets are counted in units, gizmos are weighed in kilograms."""
    match product_code:
        case WidgetCode():
            return UnitQuantity.create(raw, field_name)
        case GizmoCode():
            return KilogramQuantity.create(raw, field_name)
    raise TypeError(f"Unknown product code variant: {product_code!r}")


def quantity_value(quantity: OrderQuantity) -> Decimal:
    return Decimal(quantity.value)


# ─────────────────────── Money ───────────────────────


@dataclass(frozen=True, slots=True)
class Price:
    """A price in dollars, rounded to cents: from 0.00 to 1000.00."""

    value: Decimal

    MIN = Decimal("0.00")
    MAX = Decimal("1000.00")

    def __post_init__(self) -> None:
        _guard(check_range(self.value, "Price", self.MIN, self.MAX))

    @staticmethod
    def create(raw: Decimal | int | float | str | None, field_name: str = "Price") -> Result[Price, ConstraintError]:
        value = to_decimal(raw)
        if value is None:
            return Result.failure(PatternMismatch(field_name, "decimal"))
        error = check_range(value, field_name, Price.MIN, Price.MAX)
        if error is not None:
            return Result.failure(error)
        return Result.success(Price(_to_cents(value)))

    def multiply(self, quantity: Decimal) -> Result[Price, ConstraintError]:
        return Price.create(self.value * quantity)


@dataclass(frozen=True, slots=True)
class BillingAmount:
    """Total amount to bill for an order: from 0.00 to 10000.00."""

    value: Decimal

    MIN = Decimal("0.00")
    MAX = Decimal("10000.00")

    def __post_init__(self) -> None:
        _guard(check_range(self.value, "BillingAmount", self.MIN, self.MAX))

    @staticmethod
    def create(
        raw: Decimal | int | float | str | None, field_name: str = "BillingAmount"
    ) -> Result[BillingAmount, ConstraintError]:
        value = to_decimal(raw)
        if value is None:
            return Result.failure(PatternMismatch(field_name, "decimal"))
        error = check_range(value, field_name, BillingAmount.MIN, BillingAmount.MAX)
        if error is not None:
            return Result.failure(error)
        return Result.success(BillingAmount(_to_cents(value)))

    @staticmethod
    def sum_prices(prices: Iterable[Price]) -> Result[BillingAmount, ConstraintError]:
        return BillingAmount.create(sum((p.value for p in prices), Decimal("0.00")))
