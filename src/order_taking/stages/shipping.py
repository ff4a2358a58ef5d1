"""
Shipping stages — optional business extensions between pricing and acknowledgment.

Each stage is a pure PricedOrder → PricedOrderWithShippingMethod (or
PricedOrderWithShippingMethod → PricedOrderWithShippingMethod) function. The
priced order is carried along untouched; shipping cost is not folded into
amount_to_bill.
"""

from __future__ import annotations

import dataclasses

from order_taking.domain.models import (
    PricedOrder,
    PricedOrderWithShippingMethod,
    ShippingInfo,
    ShippingMethod,
)
from order_taking.domain.ports import CalculateShippingCost
from order_taking.domain.simple_types import Price, VipStatus


def add_shipping_info(
    priced_order: PricedOrder,
    calculate_shipping_cost: CalculateShippingCost,
    method: ShippingMethod = ShippingMethod.FEDEX_24,
) -> PricedOrderWithShippingMethod:
    return PricedOrderWithShippingMethod(
        priced_order=priced_order,
        shipping_info=ShippingInfo(method=method, cost=calculate_shipping_cost(priced_order)),
    )


def free_vip_shipping(order: PricedOrderWithShippingMethod) -> PricedOrderWithShippingMethod:
    """VIP customers always get overnight shipping for free."""
    if order.priced_order.customer_info.vip_status is not VipStatus.VIP:
        return order
    return dataclasses.replace(
        order,
        shipping_info=ShippingInfo(method=ShippingMethod.FEDEX_24, cost=Price.create(0).value()),
    )
