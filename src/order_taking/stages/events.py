"""
Event generation — fold the priced order and the acknowledgment outcome into
the workflow's output events.

Pure, total and deterministic. Order of the returned list is fixed:
acknowledgment (if sent), OrderPlaced, BillableOrderPlaced (if anything to bill).
"""

from __future__ import annotations

from order_taking.domain.models import (
    BillableOrderPlaced,
    OrderAcknowledgmentSent,
    OrderPlaced,
    PlaceOrderEvent,
    PricedOrder,
    ShippingInfo,
)


def create_order_placed_event(
    priced_order: PricedOrder, shipping_info: ShippingInfo | None = None
) -> OrderPlaced:
    return OrderPlaced(
        order_id=priced_order.order_id,
        customer_info=priced_order.customer_info,
        shipping_address=priced_order.shipping_address,
        billing_address=priced_order.billing_address,
        amount_to_bill=priced_order.amount_to_bill,
        lines=priced_order.lines,
        shipping_info=shipping_info,
    )


def create_billing_event(priced_order: PricedOrder) -> BillableOrderPlaced | None:
    if priced_order.amount_to_bill.value <= 0:
        return None
    return BillableOrderPlaced(
        order_id=priced_order.order_id,
        billing_address=priced_order.billing_address,
        amount_to_bill=priced_order.amount_to_bill,
    )


def create_events(
    priced_order: PricedOrder,
    acknowledgment: OrderAcknowledgmentSent | None,
    shipping_info: ShippingInfo | None = None,
) -> list[PlaceOrderEvent]:
    candidates: list[PlaceOrderEvent | None] = [
        acknowledgment,
        create_order_placed_event(priced_order, shipping_info),
        create_billing_event(priced_order),
    ]
    return [event for event in candidates if event is not None]
