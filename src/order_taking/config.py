"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables (12-factor app)
  - Fall back to .env file
  - Validate types and constraints at startup
  - Keep secrets out of source control

All configuration errors surface when AppSettings is constructed, never
halfway through an order.

Architecture: Only AppSettings is a BaseSettings instance. Sub-settings are plain
BaseModel classes populated by AppSettings via env_nested_delimiter="__", so the env
var ADDRESS_SERVICE__URL maps to address_service.url, SHIPPING__ENABLED maps to
shipping.enabled, etc. Dict and list fields take JSON:

    CATALOG__PRICES='{"W1234": "3.00", "G123": "7.00"}'
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from order_taking.domain.simple_types import Price, UsStateCode, create_product_code
from order_taking.stages.validation import LineValidationPolicy

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class AddressServiceSettings(BaseModel):
    """Remote address-validation service used by the CheckAddressExists adapter."""

    url: str = Field(description="Address check endpoint URL")
    api_key: SecretStr = Field(description="Bearer token for the address service")


class MailServiceSettings(BaseModel):
    """Transactional mail API used to send acknowledgment letters."""

    url: str = Field(description="Mail send endpoint URL")
    api_key: SecretStr = Field(description="Bearer token for the mail service")
    sender: str = Field(description="From address of acknowledgment emails")
    subject: str = Field(default="Your order has been received")


class CatalogSettings(BaseModel):
    """
    Product catalogue: product code → unit price.

    Every key must be a valid WidgetCode/GizmoCode and every value a valid
    Price, otherwise startup fails.
    """

    prices: dict[str, Decimal] = Field(default_factory=dict)

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, value: dict[str, Decimal]) -> dict[str, Decimal]:
        normalized: dict[str, Decimal] = {}
        for code, price in value.items():
            for check in (
                create_product_code(code, "Catalog.ProductCode"),
                Price.create(price, f"Catalog.Price[{code}]"),
            ):
                if check.is_failure():
                    raise ValueError(str(check.error()))
            normalized[code.strip()] = price
        return normalized


class ShippingSettings(BaseModel):
    """
    Optional shipping stages.

    Disabled by default: the workflow then goes straight from pricing to
    acknowledgment and OrderPlaced carries no shipping info.
    """

    enabled: bool = Field(default=False)
    vip_free_shipping: bool = Field(default=True, description="VIP customers ship overnight for free")
    local_states: list[str] = Field(default_factory=lambda: ["CA", "OR", "AZ", "NV"])
    local_rate: Decimal = Field(default=Decimal("5.00"), ge=0, le=1000)
    domestic_rate: Decimal = Field(default=Decimal("10.00"), ge=0, le=1000)
    international_rate: Decimal = Field(default=Decimal("20.00"), ge=0, le=1000)

    @field_validator("local_states")
    @classmethod
    def validate_local_states(cls, value: list[str]) -> list[str]:
        """Reject anything that is not a US state code."""
        states = [state.strip().upper() for state in value]
        for state in states:
            check = UsStateCode.create(state, "Shipping.LocalStates")
            if check.is_failure():
                raise ValueError(str(check.error()))
        return states


class ValidationSettings(BaseModel):
    line_policy: LineValidationPolicy = Field(
        default=LineValidationPolicy.FAIL_FAST,
        description="fail_fast: first invalid line wins; collect_all: report every invalid line",
    )


class AppSettings(BaseSettings):
    """
    Root application settings — aggregates all sub-settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    address_service: AddressServiceSettings
    mail_service: MailServiceSettings
    catalog: CatalogSettings = Field(default_factory=lambda: CatalogSettings())
    shipping: ShippingSettings = Field(default_factory=lambda: ShippingSettings())
    validation: ValidationSettings = Field(default_factory=lambda: ValidationSettings())

    http_timeout_seconds: int = Field(default=10, ge=1)
    log_level: str = Field(default="INFO")
    letter_template: str | None = Field(
        default=None,
        description="string.Template for the acknowledgment letter (default template when unset)",
    )
