"""
Pricing stage — ValidatedOrder → PricedOrder.

Looks up each line's unit price, multiplies it by the line quantity and sums
the line prices into amount_to_bill. The total is established here and only
here; PricedOrder checks it once on construction.
"""

from __future__ import annotations

from railway import Result

from order_taking.domain.errors import BillingAmountOutOfRange, LinePriceOutOfRange, PricingError
from order_taking.domain.models import PricedOrder, PricedOrderLine, ValidatedOrder, ValidatedOrderLine
from order_taking.domain.ports import GetProductPrice
from order_taking.domain.simple_types import BillingAmount, quantity_value


def to_priced_order_line(
    line: ValidatedOrderLine,
    get_product_price: GetProductPrice,
) -> Result[PricedOrderLine, PricingError]:
    return (
        get_product_price(line.product_code)
        .flat_map(
            lambda unit_price: unit_price.multiply(quantity_value(line.quantity)).map_failure(
                lambda error: LinePriceOutOfRange(line.order_line_id.value, error)
            )
        )
        .map(
            lambda line_price: PricedOrderLine(
                order_line_id=line.order_line_id,
                product_code=line.product_code,
                quantity=line.quantity,
                line_price=line_price,
            )
        )
    )


def price_order(
    validated: ValidatedOrder,
    get_product_price: GetProductPrice,
) -> Result[PricedOrder, PricingError]:
    """Price every line (fail-fast) and bill their sum."""
    lines = Result.all_of(to_priced_order_line(line, get_product_price) for line in validated.lines)

    return lines.flat_map(
        lambda priced_lines: BillingAmount.sum_prices(line.line_price for line in priced_lines)
        .map_failure(BillingAmountOutOfRange)
        .map(
            lambda amount_to_bill: PricedOrder(
                order_id=validated.order_id,
                customer_info=validated.customer_info,
                shipping_address=validated.shipping_address,
                billing_address=validated.billing_address,
                amount_to_bill=amount_to_bill,
                lines=tuple(priced_lines),
            )
        )
    )
