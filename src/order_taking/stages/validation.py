"""
Validation stage — UnvalidatedOrder → ValidatedOrder.

Pure business logic apart from the injected ports. The stage:

  1. builds OrderId and CustomerInfo (fail-fast, in that order)
  2. checks shipping and billing addresses with the address service,
     concurrently, then builds Address values from the confirmed data
  3. validates every order line: line id → product code syntax →
     product code existence → quantity in the unit implied by the code
  4. sequences the line results according to the LineValidationPolicy

Address-service infrastructure failures come back as ServiceError, kept
apart from ValidationError so the caller can tell "retry later" from
"this order is wrong".
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import Any, TypeAlias

from railway import Result

from order_taking.domain.errors import (
    AddressInvalidFormat,
    AddressNotFound,
    LineValidationErrors,
    NoOrderLines,
    ProductCodeNotFound,
    ServiceError,
    ValidationError,
)
from order_taking.domain.models import (
    Address,
    CheckedAddress,
    CustomerInfo,
    PersonalName,
    UnvalidatedAddress,
    UnvalidatedCustomerInfo,
    UnvalidatedOrder,
    UnvalidatedOrderLine,
    ValidatedOrder,
    ValidatedOrderLine,
)
from order_taking.domain.ports import CheckAddressExists, CheckProductCodeExists
from order_taking.domain.simple_types import (
    EmailAddress,
    OrderId,
    OrderLineId,
    OrderQuantity,
    ProductCode,
    String50,
    UsStateCode,
    VipStatus,
    ZipCode,
    create_order_quantity,
    create_product_code,
)

ValidateProductCode: TypeAlias = Callable[[ProductCode], Result[ProductCode, ValidationError]]


class LineValidationPolicy(StrEnum):
    """How per-line results are joined into one result for the order."""

    FAIL_FAST = "fail_fast"
    """Stop at the first invalid line (Result.all_of)."""

    COLLECT_ALL = "collect_all"
    """Report every invalid line at once as LineValidationErrors (Result.collect_all)."""


# ─────────────────────── Customer ───────────────────────


def to_customer_info(raw: UnvalidatedCustomerInfo) -> Result[CustomerInfo, ValidationError]:
    name = Result.combine(
        String50.create(raw.first_name, "FirstName"),
        String50.create(raw.last_name, "LastName"),
        PersonalName,
    )
    return Result.combine3(
        name,
        EmailAddress.create(raw.email_address, "EmailAddress"),
        VipStatus.create(raw.vip_status, "VipStatus"),
        CustomerInfo,
    )


# ─────────────────────── Addresses ───────────────────────


def _with_line(builder: dict[str, Any], key: str, raw: str | None, field_name: str) -> Result[dict[str, Any], ValidationError]:
    """Add an optional address line to the builder: blank means absent."""
    if raw is None or not raw.strip():
        return Result.success({**builder, key: None})
    return String50.create(raw, field_name).map(lambda line: {**builder, key: line})


def to_address(checked: CheckedAddress, field_name: str = "Address") -> Result[Address, ValidationError]:
    """Build an Address from a confirmed address, field by field (fail-fast)."""
    raw = checked.address
    b: dict[str, Any] = {}

    return (
        Result.success(b)
        .flat_map(lambda b: String50.create(raw.address_line1, f"{field_name}.AddressLine1").map(
            lambda v: {**b, "address_line1": v}
        ))
        .flat_map(lambda b: _with_line(b, "address_line2", raw.address_line2, f"{field_name}.AddressLine2"))
        .flat_map(lambda b: _with_line(b, "address_line3", raw.address_line3, f"{field_name}.AddressLine3"))
        .flat_map(lambda b: _with_line(b, "address_line4", raw.address_line4, f"{field_name}.AddressLine4"))
        .flat_map(lambda b: String50.create(raw.city, f"{field_name}.City").map(
            lambda v: {**b, "city": v}
        ))
        .flat_map(lambda b: ZipCode.create(raw.zip_code, f"{field_name}.ZipCode").map(
            lambda v: {**b, "zip_code": v}
        ))
        .flat_map(lambda b: UsStateCode.create(raw.state, f"{field_name}.State").map(
            lambda v: {**b, "state": v}
        ))
        .flat_map(lambda b: String50.create(raw.country, f"{field_name}.Country").map(
            lambda v: {**b, "country": v}
        ))
        .map(lambda b: Address(**b))
    )


def _label_address_error(error: Any, field_name: str) -> ValidationError | ServiceError:
    match error:
        case AddressNotFound() | AddressInvalidFormat():
            return dataclasses.replace(error, field_name=field_name)
        case _:
            return error


async def to_checked_address(
    raw: UnvalidatedAddress,
    check_address_exists: CheckAddressExists,
    field_name: str = "Address",
) -> Result[CheckedAddress, ValidationError | ServiceError]:
    """Ask the address service about one address; label domain errors with the field."""
    result = await check_address_exists(raw)
    return result.map_failure(lambda error: _label_address_error(error, field_name))


async def _resolve_addresses(
    unvalidated: UnvalidatedOrder,
    check_address_exists: CheckAddressExists,
) -> Result[tuple[Address, Address], ValidationError | ServiceError]:
    checked = await Result.gather(
        [
            to_checked_address(unvalidated.shipping_address, check_address_exists, "ShippingAddress"),
            to_checked_address(unvalidated.billing_address, check_address_exists, "BillingAddress"),
        ]
    )
    return checked.flat_map(
        lambda pair: Result.combine(
            to_address(pair[0], "ShippingAddress"),
            to_address(pair[1], "BillingAddress"),
            lambda shipping, billing: (shipping, billing),
        )
    )


# ─────────────────────── Order lines ───────────────────────


def to_product_code_check(check_product_code_exists: CheckProductCodeExists) -> ValidateProductCode:
    """
    Adapt the boolean existence port into a Result-returning switch function,
    so it composes with flat_map like every other validation step.
    """

    def check(product_code: ProductCode) -> Result[ProductCode, ValidationError]:
        if check_product_code_exists(product_code):
            return Result.success(product_code)
        return Result.failure(ProductCodeNotFound(product_code.value))

    return check


def to_product_code(raw: str, validate_product_code: ValidateProductCode) -> Result[ProductCode, ValidationError]:
    """Syntax first, existence second."""
    return create_product_code(raw, "ProductCode").flat_map(validate_product_code)


def to_order_quantity(product_code: ProductCode, raw: Any) -> Result[OrderQuantity, ValidationError]:
    return create_order_quantity(product_code, raw, "Quantity")


def to_validated_order_line(
    raw: UnvalidatedOrderLine,
    validate_product_code: ValidateProductCode,
) -> Result[ValidatedOrderLine, ValidationError]:
    return OrderLineId.create(raw.order_line_id, "OrderLineId").flat_map(
        lambda line_id: to_product_code(raw.product_code, validate_product_code).flat_map(
            lambda code: to_order_quantity(code, raw.quantity).map(
                lambda quantity: ValidatedOrderLine(line_id, code, quantity)
            )
        )
    )


def validate_order_lines(
    lines: Sequence[UnvalidatedOrderLine],
    validate_product_code: ValidateProductCode,
    policy: LineValidationPolicy = LineValidationPolicy.FAIL_FAST,
) -> Result[tuple[ValidatedOrderLine, ...], ValidationError]:
    if not lines:
        return Result.failure(NoOrderLines())

    results = [to_validated_order_line(line, validate_product_code) for line in lines]
    match policy:
        case LineValidationPolicy.FAIL_FAST:
            joined = Result.all_of(results)
        case LineValidationPolicy.COLLECT_ALL:
            joined = Result.collect_all(results).map_failure(
                lambda errors: LineValidationErrors(tuple(errors))
            )
    return joined.map(tuple)


# ─────────────────────── Stage ───────────────────────


async def validate_order(
    unvalidated: UnvalidatedOrder,
    check_product_code_exists: CheckProductCodeExists,
    check_address_exists: CheckAddressExists,
    line_policy: LineValidationPolicy = LineValidationPolicy.FAIL_FAST,
) -> Result[ValidatedOrder, ValidationError | ServiceError]:
    """
    Validate a raw order against its constraints and the external checks.

    The address service is only called once the order id and customer info
    are valid; the two address checks run concurrently.
    """
    validate_product_code = to_product_code_check(check_product_code_exists)

    header = Result.combine(
        OrderId.create(unvalidated.order_id, "OrderId"),
        to_customer_info(unvalidated.customer_info),
        lambda order_id, customer: (order_id, customer),
    )
    addresses = await header.flat_map_async(
        lambda _: _resolve_addresses(unvalidated, check_address_exists)
    )
    lines = addresses.flat_map(
        lambda _: validate_order_lines(unvalidated.lines, validate_product_code, line_policy)
    )

    return Result.combine3(
        header,
        addresses,
        lines,
        lambda h, a, validated_lines: ValidatedOrder(
            order_id=h[0],
            customer_info=h[1],
            shipping_address=a[0],
            billing_address=a[1],
            lines=validated_lines,
        ),
    )
