"""
Shared test fixtures and builders for the order-taking test suite.

Builders are exposed as factory fixtures so each test states only the
fields it cares about:

    def test_x(make_unvalidated_order):
        order = make_unvalidated_order(order_id="")
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from railway import Result

from order_taking.domain.models import (
    Address,
    CheckedAddress,
    CustomerInfo,
    PersonalName,
    PricedOrder,
    PricedOrderLine,
    SendResult,
    UnvalidatedAddress,
    UnvalidatedCustomerInfo,
    UnvalidatedOrder,
    UnvalidatedOrderLine,
)
from order_taking.domain.simple_types import (
    BillingAmount,
    EmailAddress,
    HtmlString,
    OrderId,
    OrderLineId,
    Price,
    String50,
    UnitQuantity,
    UsStateCode,
    VipStatus,
    WidgetCode,
    ZipCode,
)

KNOWN_PRICES: dict[str, str] = {"W1234": "3.00", "W5678": "7.00", "G123": "4.00"}


def unvalidated_address(**overrides: object) -> UnvalidatedAddress:
    fields: dict[str, object] = {
        "address_line1": "1 Main Street",
        "city": "Springfield",
        "zip_code": "90210",
        "state": "CA",
        "country": "US",
    }
    fields.update(overrides)
    return UnvalidatedAddress(**fields)  # type: ignore[arg-type]


@pytest.fixture()
def make_unvalidated_address() -> Callable[..., UnvalidatedAddress]:
    return unvalidated_address


@pytest.fixture()
def make_unvalidated_order() -> Callable[..., UnvalidatedOrder]:
    """Factory for a valid raw order; keyword overrides replace single fields."""

    def make(
        order_id: str = "ORD-1",
        first_name: str = "Ada",
        last_name: str = "Lovelace",
        email_address: str = "ada@example.com",
        vip_status: str = "Normal",
        shipping_address: UnvalidatedAddress | None = None,
        billing_address: UnvalidatedAddress | None = None,
        lines: tuple[UnvalidatedOrderLine, ...] | None = None,
    ) -> UnvalidatedOrder:
        return UnvalidatedOrder(
            order_id=order_id,
            customer_info=UnvalidatedCustomerInfo(first_name, last_name, email_address, vip_status),
            shipping_address=shipping_address or unvalidated_address(),
            billing_address=billing_address or unvalidated_address(),
            lines=lines
            if lines is not None
            else (
                UnvalidatedOrderLine("L1", "W1234", 1),
                UnvalidatedOrderLine("L2", "W5678", 1),
            ),
        )

    return make


@pytest.fixture()
def address() -> Address:
    return Address(
        address_line1=String50("1 Main Street"),
        city=String50("Springfield"),
        zip_code=ZipCode("90210"),
        state=UsStateCode("CA"),
        country=String50("US"),
    )


@pytest.fixture()
def make_customer_info() -> Callable[..., CustomerInfo]:
    def make(vip_status: VipStatus = VipStatus.NORMAL) -> CustomerInfo:
        return CustomerInfo(
            name=PersonalName(String50("Ada"), String50("Lovelace")),
            email_address=EmailAddress("ada@example.com"),
            vip_status=vip_status,
        )

    return make


@pytest.fixture()
def make_priced_order(
    address: Address, make_customer_info: Callable[..., CustomerInfo]
) -> Callable[..., PricedOrder]:
    """Factory for a consistent PricedOrder: one widget line per price, total = sum."""

    def make(
        line_prices: tuple[str, ...] = ("3.00", "7.00"),
        vip_status: VipStatus = VipStatus.NORMAL,
        shipping_address: Address | None = None,
    ) -> PricedOrder:
        lines = tuple(
            PricedOrderLine(
                order_line_id=OrderLineId(f"L{i}"),
                product_code=WidgetCode("W1234"),
                quantity=UnitQuantity(1),
                line_price=Price(Decimal(price)),
            )
            for i, price in enumerate(line_prices, start=1)
        )
        return PricedOrder(
            order_id=OrderId("ORD-1"),
            customer_info=make_customer_info(vip_status),
            shipping_address=shipping_address or address,
            billing_address=address,
            amount_to_bill=BillingAmount(sum((Decimal(p) for p in line_prices), Decimal("0.00"))),
            lines=lines,
        )

    return make


@pytest.fixture()
def priced_order(make_priced_order: Callable[..., PricedOrder]) -> PricedOrder:
    return make_priced_order()


# ─────────────────────── Port fakes ───────────────────────


@pytest.fixture()
def check_product_code_exists() -> MagicMock:
    """Catalogue fake: every code in KNOWN_PRICES exists."""
    return MagicMock(side_effect=lambda code: code.value in KNOWN_PRICES)


@pytest.fixture()
def check_address_exists() -> AsyncMock:
    """Address service fake: every address exists."""
    return AsyncMock(side_effect=lambda address: Result.success(CheckedAddress(address)))


@pytest.fixture()
def get_product_price() -> MagicMock:
    """Price fake backed by KNOWN_PRICES."""
    return MagicMock(side_effect=lambda code: Price.create(KNOWN_PRICES[code.value]))


@pytest.fixture()
def create_letter() -> MagicMock:
    return MagicMock(return_value=HtmlString("<p>Thank you</p>"))


@pytest.fixture()
def send_acknowledgment() -> AsyncMock:
    return AsyncMock(return_value=SendResult.SENT)
