"""
Flat-rate shipping table — implements CalculateShippingCost.

  shipping address in a local state           → local_rate
  elsewhere in a domestic country             → domestic_rate
  anywhere else                               → international_rate
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from order_taking.domain.models import PricedOrder
from order_taking.domain.simple_types import Price

DOMESTIC_COUNTRIES = frozenset({"US", "USA", "UNITED STATES"})


def _price(raw: Decimal | int | str, name: str) -> Price:
    result = Price.create(raw, name)
    if result.is_failure():
        raise ValueError(f"Invalid shipping rate: {result.error()}")
    return result.value()


class ShippingRateTable:
    def __init__(
        self,
        local_states: Iterable[str],
        local_rate: Decimal | int | str,
        domestic_rate: Decimal | int | str,
        international_rate: Decimal | int | str,
        domestic_countries: Iterable[str] = DOMESTIC_COUNTRIES,
    ) -> None:
        self._local_states = frozenset(s.strip().upper() for s in local_states)
        self._domestic_countries = frozenset(c.strip().upper() for c in domestic_countries)
        self._local_rate = _price(local_rate, "LocalRate")
        self._domestic_rate = _price(domestic_rate, "DomesticRate")
        self._international_rate = _price(international_rate, "InternationalRate")

    def __call__(self, priced_order: PricedOrder) -> Price:
        address = priced_order.shipping_address
        if address.country.value.upper() not in self._domestic_countries:
            return self._international_rate
        if address.state.value in self._local_states:
            return self._local_rate
        return self._domestic_rate
