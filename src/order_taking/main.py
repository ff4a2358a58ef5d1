"""
Composition root — wires adapters into the place-order workflow.

Creates concrete adapters, partially applies them into the stages and
returns a single callable: PlaceOrderCommand → Result[events, PlaceOrderError].

This is the ONLY place where concrete classes are instantiated.
Everything else depends on Protocol interfaces.

Responsibilities:
  1. Configure structlog for structured logging
  2. Create concrete adapter instances (address checker, catalogue,
     letter renderer, mail sender, shipping rate table)
  3. Wire the stages (partial application with ports)
  4. Wrap each run in a LoggingExecutionContext and log its outcome

The inbound transport (HTTP endpoint, queue consumer, ...) is left to the
host application: it loads AppSettings, calls build_place_order_workflow
once, then awaits the returned callable per command.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from functools import partial
from typing import TypeAlias

import structlog
from railway import LoggingExecutionContext, Result

from order_taking import __version__
from order_taking.adapters.address_service import HttpAddressChecker
from order_taking.adapters.catalog import InMemoryProductCatalog
from order_taking.adapters.letters import HtmlLetterRenderer
from order_taking.adapters.mail_service import HttpAcknowledgmentSender
from order_taking.adapters.shipping_rates import ShippingRateTable
from order_taking.config import AppSettings, ShippingSettings
from order_taking.domain.errors import PlaceOrderError
from order_taking.domain.models import (
    PlaceOrderCommand,
    PlaceOrderEvent,
    PricedOrder,
    PricedOrderWithShippingMethod,
)
from order_taking.pipeline import ShipOrder, place_order
from order_taking.stages.acknowledgment import acknowledge_order
from order_taking.stages.pricing import price_order
from order_taking.stages.shipping import add_shipping_info, free_vip_shipping
from order_taking.stages.validation import validate_order

log = structlog.get_logger()

PlaceOrderWorkflow: TypeAlias = Callable[
    [PlaceOrderCommand], Awaitable[Result[list[PlaceOrderEvent], PlaceOrderError]]
]


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured logging.

    Colored, human-readable console output with ISO timestamps; events below
    log_level are dropped by the filtering bound logger.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


_Adapters: TypeAlias = tuple[
    InMemoryProductCatalog,
    HttpAddressChecker,
    HtmlLetterRenderer,
    HttpAcknowledgmentSender,
    ShippingRateTable,
]


def _create_adapters(settings: AppSettings) -> _Adapters:
    """
    Instantiate all concrete adapters from application settings.

    Creates 5 adapters: product catalogue, address checker, letter renderer,
    acknowledgment sender, and shipping rate table.
    """
    catalog = InMemoryProductCatalog(settings.catalog.prices)
    address_checker = HttpAddressChecker(
        url=settings.address_service.url,
        api_key=settings.address_service.api_key.get_secret_value(),
        timeout=settings.http_timeout_seconds,
    )
    letter_renderer = HtmlLetterRenderer(settings.letter_template)
    acknowledgment_sender = HttpAcknowledgmentSender(
        url=settings.mail_service.url,
        api_key=settings.mail_service.api_key.get_secret_value(),
        sender=settings.mail_service.sender,
        subject=settings.mail_service.subject,
        timeout=settings.http_timeout_seconds,
    )
    shipping_rates = ShippingRateTable(
        local_states=settings.shipping.local_states,
        local_rate=settings.shipping.local_rate,
        domestic_rate=settings.shipping.domestic_rate,
        international_rate=settings.shipping.international_rate,
    )
    return catalog, address_checker, letter_renderer, acknowledgment_sender, shipping_rates


def _shipping_stage(shipping: ShippingSettings, rates: ShippingRateTable) -> ShipOrder | None:
    """Compose the optional shipping stages, or None when shipping is disabled."""
    if not shipping.enabled:
        return None
    add_shipping = partial(add_shipping_info, calculate_shipping_cost=rates)
    if not shipping.vip_free_shipping:
        return add_shipping

    def ship(priced_order: PricedOrder) -> PricedOrderWithShippingMethod:
        return free_vip_shipping(add_shipping(priced_order))

    return ship


def build_place_order_workflow(settings: AppSettings) -> PlaceOrderWorkflow:
    """
    Wire dependencies and return the ready-to-run workflow.

    The returned coroutine function shares no mutable state between calls,
    so any number of orders may be placed concurrently.
    """
    catalog, address_checker, letter_renderer, acknowledgment_sender, shipping_rates = (
        _create_adapters(settings)
    )

    validate = partial(
        validate_order,
        check_product_code_exists=catalog.code_exists,
        check_address_exists=address_checker,
        line_policy=settings.validation.line_policy,
    )
    price = partial(price_order, get_product_price=catalog.get_price)
    acknowledge = partial(
        acknowledge_order,
        create_acknowledgment_letter=letter_renderer,
        send_acknowledgment=acknowledgment_sender,
    )
    ship = _shipping_stage(settings.shipping, shipping_rates)
    context = LoggingExecutionContext(operation="PlaceOrder")

    log.info(
        "app.workflow_ready",
        version=__version__,
        products=len(catalog),
        line_policy=settings.validation.line_policy.value,
        shipping_enabled=settings.shipping.enabled,
    )

    async def run(command: PlaceOrderCommand) -> Result[list[PlaceOrderEvent], PlaceOrderError]:
        bound = log.bind(order_id=command.data.order_id, user_id=command.user_id)
        bound.info("place_order.received", lines=len(command.data.lines))

        result = await context.execute_async(
            lambda: place_order(command, validate, price, acknowledge, ship)
        )
        return result.peek(
            lambda events: bound.info(
                "place_order.completed",
                events=[type(event).__name__ for event in events],
            )
        ).peek_failure(
            lambda error: bound.warning(
                "place_order.failed",
                error_type=type(error).__name__,
                error=str(error.error),
            )
        )

    return run
