"""Storefront settings — environment variables with code defaults.

Every value can be overridden with a ``STOREFRONT_*`` environment variable
(for example ``STOREFRONT_TAX_RATE=0.2``) or passed explicitly when the
hosting shell constructs the settings object.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CART_STORAGE_KEY = "cart"


class StorefrontSettings(BaseSettings):
    """Settings for the cart and checkout core.

    Attributes:
        environment: Deployment environment; drives log rendering.
        storage_key: Key under which the cart is persisted.
        storage_path: JSON file backing the durable store. When unset, the
            cart lives in an in-memory store for the lifetime of the process.
        default_country: Country pre-filled on new checkout sessions.
        tax_rate: Fraction of the subtotal charged as tax.
        shipping_cost: Flat shipping charge added to every order.
        currency: ISO currency code shown on the order summary.
        log_dir: Directory for rotating log files.
        log_level: Explicit log level; derived from ``environment`` when unset.
    """

    model_config = SettingsConfigDict(env_prefix="STOREFRONT_", frozen=True)

    environment: str = "development"
    storage_key: str = CART_STORAGE_KEY
    storage_path: Path | None = None
    default_country: str = "US"
    tax_rate: float = Field(default=0.1, ge=0.0)
    shipping_cost: float = Field(default=0.0, ge=0.0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    log_dir: Path = Path("logs")
    log_level: str | None = None
