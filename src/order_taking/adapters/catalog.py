"""
In-memory product catalogue — implements CheckProductCodeExists and GetProductPrice.

Loaded once from configuration. Every entry is validated at construction
with the domain's own smart constructors, so a bad price table fails at
startup instead of mid-order.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from railway import Result

from order_taking.domain.errors import PricingError, ProductNotPriced
from order_taking.domain.simple_types import Price, ProductCode, create_product_code


class InMemoryProductCatalog:
    def __init__(self, prices: Mapping[str, Decimal | int | float | str]) -> None:
        self._prices: dict[str, Price] = {}
        for raw_code, raw_price in prices.items():
            code = create_product_code(raw_code, "Catalog.ProductCode")
            price = Price.create(raw_price, f"Catalog.Price[{raw_code}]")
            entry = Result.combine(code, price, lambda c, p: (c.value, p))
            if entry.is_failure():
                raise ValueError(f"Invalid catalog entry {raw_code!r}: {entry.error()}")
            key, unit_price = entry.value()
            self._prices[key] = unit_price

    def __len__(self) -> int:
        return len(self._prices)

    def code_exists(self, product_code: ProductCode) -> bool:
        return product_code.value in self._prices

    def get_price(self, product_code: ProductCode) -> Result[Price, PricingError]:
        return Result.from_optional(
            self._prices.get(product_code.value),
            ProductNotPriced(product_code.value),
        )
