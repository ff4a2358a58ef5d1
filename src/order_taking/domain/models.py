"""
Domain models — the order lifecycle as a sequence of distinct immutable types.

    UnvalidatedOrder ─validate→ ValidatedOrder ─price→ PricedOrder
        ─(optional shipping stages)→ PricedOrderWithShippingMethod
        ─acknowledge/create_events→ list[PlaceOrderEvent]

Each state is its own frozen dataclass, never one mutable record with
optional fields, so a stage cannot be handed an order in the wrong state.
Unvalidated records hold raw primitives straight from the input document;
everything after validation holds constrained simple types only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from order_taking.domain.simple_types import (
    BillingAmount,
    EmailAddress,
    HtmlString,
    OrderId,
    OrderLineId,
    OrderQuantity,
    Price,
    ProductCode,
    String50,
    UsStateCode,
    VipStatus,
    ZipCode,
)

# ─────────────────────── Unvalidated (raw input) ───────────────────────


@dataclass(frozen=True, slots=True)
class UnvalidatedCustomerInfo:
    first_name: str
    last_name: str
    email_address: str
    vip_status: str = "Normal"


@dataclass(frozen=True, slots=True)
class UnvalidatedAddress:
    address_line1: str
    city: str
    zip_code: str
    state: str
    country: str
    address_line2: str | None = None
    address_line3: str | None = None
    address_line4: str | None = None


@dataclass(frozen=True, slots=True)
class UnvalidatedOrderLine:
    order_line_id: str
    product_code: str
    quantity: Decimal | int | float | str


@dataclass(frozen=True, slots=True)
class UnvalidatedOrder:
    order_id: str
    customer_info: UnvalidatedCustomerInfo
    shipping_address: UnvalidatedAddress
    billing_address: UnvalidatedAddress
    lines: tuple[UnvalidatedOrderLine, ...]


@dataclass(frozen=True, slots=True)
class PlaceOrderCommand:
    """Inbound command: the raw order plus who sent it and when."""

    data: UnvalidatedOrder
    timestamp: datetime
    user_id: str


@dataclass(frozen=True, slots=True)
class CheckedAddress:
    """An unvalidated address the address service has confirmed exists."""

    address: UnvalidatedAddress


# ─────────────────────── Validated ───────────────────────


@dataclass(frozen=True, slots=True)
class PersonalName:
    first_name: String50
    last_name: String50


@dataclass(frozen=True, slots=True)
class CustomerInfo:
    name: PersonalName
    email_address: EmailAddress
    vip_status: VipStatus = VipStatus.NORMAL


@dataclass(frozen=True, slots=True)
class Address:
    address_line1: String50
    city: String50
    zip_code: ZipCode
    state: UsStateCode
    country: String50
    address_line2: String50 | None = None
    address_line3: String50 | None = None
    address_line4: String50 | None = None


@dataclass(frozen=True, slots=True)
class ValidatedOrderLine:
    order_line_id: OrderLineId
    product_code: ProductCode
    quantity: OrderQuantity


@dataclass(frozen=True, slots=True)
class ValidatedOrder:
    order_id: OrderId
    customer_info: CustomerInfo
    shipping_address: Address
    billing_address: Address
    lines: tuple[ValidatedOrderLine, ...]

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("A validated order must have at least one line")


# ─────────────────────── Priced ───────────────────────


@dataclass(frozen=True, slots=True)
class PricedOrderLine:
    order_line_id: OrderLineId
    product_code: ProductCode
    quantity: OrderQuantity
    line_price: Price


@dataclass(frozen=True, slots=True)
class PricedOrder:
    """
    A validated order with a price on every line.

    amount_to_bill is the sum of all line prices. The equality is checked
    here, once, when the pricing stage builds the record; the record is frozen
    so it cannot drift afterwards.
    """

    order_id: OrderId
    customer_info: CustomerInfo
    shipping_address: Address
    billing_address: Address
    amount_to_bill: BillingAmount
    lines: tuple[PricedOrderLine, ...]

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("A priced order must have at least one line")
        total = sum((line.line_price.value for line in self.lines), Decimal("0.00"))
        if self.amount_to_bill.value != total:
            raise ValueError(
                f"amount_to_bill {self.amount_to_bill.value} does not match line total {total}"
            )


class ShippingMethod(Enum):
    POSTAL_SERVICE = "PostalService"
    FEDEX_24 = "Fedex24"
    FEDEX_48 = "Fedex48"
    UPS_48 = "Ups48"


@dataclass(frozen=True, slots=True)
class ShippingInfo:
    method: ShippingMethod
    cost: Price


@dataclass(frozen=True, slots=True)
class PricedOrderWithShippingMethod:
    """A priced order extended with shipping; the priced order itself is untouched."""

    priced_order: PricedOrder
    shipping_info: ShippingInfo


# ─────────────────────── Acknowledgment ───────────────────────


@dataclass(frozen=True, slots=True)
class OrderAcknowledgment:
    email_address: EmailAddress
    letter: HtmlString


class SendResult(Enum):
    SENT = "Sent"
    NOT_SENT = "NotSent"


# ─────────────────────── Events ───────────────────────


@dataclass(frozen=True, slots=True)
class OrderAcknowledgmentSent:
    order_id: OrderId
    email_address: EmailAddress


@dataclass(frozen=True, slots=True)
class OrderPlaced:
    """The priced order as published to shipping and downstream contexts."""

    order_id: OrderId
    customer_info: CustomerInfo
    shipping_address: Address
    billing_address: Address
    amount_to_bill: BillingAmount
    lines: tuple[PricedOrderLine, ...]
    shipping_info: ShippingInfo | None = field(default=None)


@dataclass(frozen=True, slots=True)
class BillableOrderPlaced:
    order_id: OrderId
    billing_address: Address
    amount_to_bill: BillingAmount


PlaceOrderEvent = OrderAcknowledgmentSent | OrderPlaced | BillableOrderPlaced
