"""
Acceptance test fixtures — the real composition root against mocked HTTP services.

The address service and the mail API are replaced by respx routes; everything
else (settings, adapters, stages, pipeline) is the production wiring.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import NamedTuple

import httpx
import pytest
import respx

from order_taking.config import AppSettings

ADDRESS_URL = "https://address.example.com/v1/check"
MAIL_URL = "https://mail.example.com/v3/send"
PRICES = {"W1234": "3.00", "W5678": "7.00", "G123": "4.00", "W0000": "0.00"}


class ServiceRoutes(NamedTuple):
    address: respx.Route
    mail: respx.Route


@pytest.fixture()
def services() -> Iterator[ServiceRoutes]:
    """Mock both remote services: every address exists, every email is accepted."""
    with respx.mock(assert_all_called=False) as router:
        address = router.post(ADDRESS_URL).mock(return_value=httpx.Response(200, json={"exists": True}))
        mail = router.post(MAIL_URL).mock(return_value=httpx.Response(202))
        yield ServiceRoutes(address, mail)


@pytest.fixture()
def make_settings() -> Callable[..., AppSettings]:
    def make(**overrides: object) -> AppSettings:
        fields: dict[str, object] = {
            "address_service": {"url": ADDRESS_URL, "api_key": "address-key"},
            "mail_service": {"url": MAIL_URL, "api_key": "mail-key", "sender": "orders@example.com"},
            "catalog": {"prices": PRICES},
        }
        fields.update(overrides)
        return AppSettings(_env_file=None, **fields)

    return make
