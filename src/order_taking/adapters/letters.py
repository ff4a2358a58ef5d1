"""
Acknowledgment letter renderer — implements CreateOrderAcknowledgmentLetter.

Renders a string.Template into HTML. Every substituted value is HTML-escaped;
the template itself is trusted (it comes from configuration).

Available placeholders:
  $first_name, $last_name, $order_id, $amount_to_bill, $lines
"""

from __future__ import annotations

import html
from string import Template

from order_taking.domain.models import PricedOrder, PricedOrderLine
from order_taking.domain.simple_types import HtmlString

DEFAULT_TEMPLATE = """\
<html>
<body>
<p>Dear $first_name $last_name,</p>
<p>Thank you for your order $order_id.</p>
<ul>
$lines
</ul>
<p>Amount to bill: $$$amount_to_bill</p>
</body>
</html>
"""


def _render_line(line: PricedOrderLine) -> str:
    return "<li>{code} x {quantity}: ${price}</li>".format(
        code=html.escape(line.product_code.value),
        quantity=html.escape(str(line.quantity.value)),
        price=html.escape(str(line.line_price.value)),
    )


class HtmlLetterRenderer:
    def __init__(self, template: str | None = None) -> None:
        self._template = Template(template or DEFAULT_TEMPLATE)

    def __call__(self, priced_order: PricedOrder) -> HtmlString:
        name = priced_order.customer_info.name
        rendered = self._template.safe_substitute(
            first_name=html.escape(name.first_name.value),
            last_name=html.escape(name.last_name.value),
            order_id=html.escape(priced_order.order_id.value),
            amount_to_bill=html.escape(str(priced_order.amount_to_bill.value)),
            lines="\n".join(_render_line(line) for line in priced_order.lines),
        )
        return HtmlString(rendered)
