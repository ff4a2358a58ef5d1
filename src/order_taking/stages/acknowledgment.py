"""
Acknowledgment stage — a dead-end side effect wrapped as a pass-through.

The letter is rendered (pure) and handed to the sender. A letter that could
not be sent produces no event; it never fails the workflow.
"""

from __future__ import annotations

from order_taking.domain.models import (
    OrderAcknowledgment,
    OrderAcknowledgmentSent,
    PricedOrder,
    SendResult,
)
from order_taking.domain.ports import CreateOrderAcknowledgmentLetter, SendOrderAcknowledgment


async def acknowledge_order(
    priced_order: PricedOrder,
    create_acknowledgment_letter: CreateOrderAcknowledgmentLetter,
    send_acknowledgment: SendOrderAcknowledgment,
) -> OrderAcknowledgmentSent | None:
    acknowledgment = OrderAcknowledgment(
        email_address=priced_order.customer_info.email_address,
        letter=create_acknowledgment_letter(priced_order),
    )
    match await send_acknowledgment(acknowledgment):
        case SendResult.SENT:
            return OrderAcknowledgmentSent(
                order_id=priced_order.order_id,
                email_address=priced_order.customer_info.email_address,
            )
        case SendResult.NOT_SENT:
            return None
