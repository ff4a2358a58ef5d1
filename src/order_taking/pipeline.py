"""
Pipeline — the place-order workflow as one railway.

Domain layer — PURE BUSINESS LOGIC. Every stage arrives already bound to its
ports (the composition root partially applies them), so this module only
decides the order of the stages and how their errors are unified:

  validate(order)                        Result[ValidatedOrder, ValidationError | ServiceError]
    → map_failure(ValidationFailed | RemoteServiceFailed)
    → flat_map(price)                    Result[PricedOrder, PricingError → PricingFailed]
      → map(ship)                        optional PricedOrder → PricedOrderWithShippingMethod
        → map_async(acknowledge)         OrderAcknowledgmentSent | None, never a failure
          → map(create_events)           list[PlaceOrderEvent]

Errors are unified into PlaceOrderError here, once. The first failure
short-circuits everything after it; partial results are never returned.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import NamedTuple, TypeAlias

from railway import Result

from order_taking.domain.errors import (
    PlaceOrderError,
    PricingError,
    PricingFailed,
    RemoteServiceFailed,
    ServiceError,
    ValidationError,
    ValidationFailed,
)
from order_taking.domain.models import (
    OrderAcknowledgmentSent,
    PlaceOrderCommand,
    PlaceOrderEvent,
    PricedOrder,
    PricedOrderWithShippingMethod,
    ShippingInfo,
    UnvalidatedOrder,
    ValidatedOrder,
)
from order_taking.stages.events import create_events

ValidateOrder: TypeAlias = Callable[
    [UnvalidatedOrder], Awaitable[Result[ValidatedOrder, ValidationError | ServiceError]]
]
PriceOrder: TypeAlias = Callable[[ValidatedOrder], Result[PricedOrder, PricingError]]
ShipOrder: TypeAlias = Callable[[PricedOrder], PricedOrderWithShippingMethod]
AcknowledgeOrder: TypeAlias = Callable[[PricedOrder], Awaitable[OrderAcknowledgmentSent | None]]


class _Shipped(NamedTuple):
    priced_order: PricedOrder
    shipping_info: ShippingInfo | None


class _Acknowledged(NamedTuple):
    priced_order: PricedOrder
    shipping_info: ShippingInfo | None
    acknowledgment: OrderAcknowledgmentSent | None


def to_place_order_error(error: ValidationError | ServiceError) -> PlaceOrderError:
    """Lift the validation stage's errors into the workflow error union."""
    match error:
        case ServiceError():
            return RemoteServiceFailed(error)
        case _:
            return ValidationFailed(error)


def _ship(priced_order: PricedOrder, ship: ShipOrder | None) -> _Shipped:
    if ship is None:
        return _Shipped(priced_order, None)
    return _Shipped(priced_order, ship(priced_order).shipping_info)


async def _acknowledge(shipped: _Shipped, acknowledge: AcknowledgeOrder) -> _Acknowledged:
    acknowledgment = await acknowledge(shipped.priced_order)
    return _Acknowledged(shipped.priced_order, shipped.shipping_info, acknowledgment)


async def place_order(
    command: PlaceOrderCommand,
    validate: ValidateOrder,
    price: PriceOrder,
    acknowledge: AcknowledgeOrder,
    ship: ShipOrder | None = None,
) -> Result[list[PlaceOrderEvent], PlaceOrderError]:
    """
    Run one order through the whole workflow.

    Returns Success with the ordered event list, or Failure with exactly one
    PlaceOrderError describing the first stage that failed.
    """
    validated = await validate(command.data)

    shipped = (
        validated.map_failure(to_place_order_error)
        .flat_map(lambda order: price(order).map_failure(PricingFailed))
        .map(lambda priced_order: _ship(priced_order, ship))
    )
    acknowledged = await shipped.map_async(lambda s: _acknowledge(s, acknowledge))

    return acknowledged.map(
        lambda a: create_events(a.priced_order, a.acknowledgment, a.shipping_info)
    )
