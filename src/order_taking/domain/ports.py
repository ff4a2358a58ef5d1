"""
Ports — function-shaped capability interfaces the stages depend on.

These define WHAT the workflow needs from the outside world without saying
HOW it is provided. Each port is a callable Protocol: any function, bound
method or object with a matching __call__ satisfies it structurally, so the
composition root can hand a plain function, a partial, or an adapter instance
to a stage.

Suspension points are explicit: only the ports declared `async` may await a
remote call. Everything else is synchronous.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from railway import Result

from order_taking.domain.errors import AddressCheckError, PricingError
from order_taking.domain.models import (
    CheckedAddress,
    OrderAcknowledgment,
    PricedOrder,
    SendResult,
    UnvalidatedAddress,
)
from order_taking.domain.simple_types import HtmlString, Price, ProductCode


@runtime_checkable
class CheckProductCodeExists(Protocol):
    """
    Port: is this (syntactically valid) product code in the catalogue?

    Returns a bare bool. The validation stage adapts it into a
    Result-returning check before composing it.
    """

    def __call__(self, product_code: ProductCode) -> bool: ...


@runtime_checkable
class CheckAddressExists(Protocol):
    """
    Port: confirm with the address service that an address exists.

    Remote and asynchronous. Returns:
      - Success(CheckedAddress)       → the address is real
      - Failure(AddressNotFound)      → the service says it doesn't exist
      - Failure(AddressInvalidFormat) → the service can't parse it
      - Failure(ServiceError)         → timeout, auth or transport failure
    """

    async def __call__(
        self, address: UnvalidatedAddress
    ) -> Result[CheckedAddress, AddressCheckError]: ...


@runtime_checkable
class GetProductPrice(Protocol):
    """Port: unit price of a product. Unknown codes fail with ProductNotPriced."""

    def __call__(self, product_code: ProductCode) -> Result[Price, PricingError]: ...


@runtime_checkable
class CreateOrderAcknowledgmentLetter(Protocol):
    """Port: render the acknowledgment letter for a priced order (pure)."""

    def __call__(self, priced_order: PricedOrder) -> HtmlString: ...


@runtime_checkable
class SendOrderAcknowledgment(Protocol):
    """
    Port: send the acknowledgment email.

    Not sending is an outcome, not an error: the result is SENT or NOT_SENT.
    """

    async def __call__(self, acknowledgment: OrderAcknowledgment) -> SendResult: ...


@runtime_checkable
class CalculateShippingCost(Protocol):
    """Port: shipping cost for a priced order (pure business calculation)."""

    def __call__(self, priced_order: PricedOrder) -> Price: ...
