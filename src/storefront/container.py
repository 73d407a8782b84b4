"""Composition root for the cart and checkout core.

The hosting shell calls ``build_storefront()`` once and passes the resulting
services to whatever needs them. Nothing here is a global: the shell decides
how long a Storefront lives and how many exist.

Domain objects need an active Protean domain context, so the shell wraps its
use of the services in one:

    storefront.init()
    with storefront.domain_context():
        shop = build_storefront(settings, order_service=MyOrderService())
        shop.cart_store.add(product)
"""

from dataclasses import dataclass

import structlog

from storefront.cart.store import CartStore
from storefront.checkout.controller import CheckoutController
from storefront.checkout.submission import OrderSubmitter
from storefront.config import StorefrontSettings
from storefront.identity.fake_adapter import StaticIdentityProvider
from storefront.identity.port import IdentityProvider
from storefront.navigation.fake_adapter import RecordingNavigationSignal
from storefront.navigation.port import NavigationSignal
from storefront.orders.fake_adapter import FakeOrderService
from storefront.orders.port import OrderService
from storefront.storage import create_store
from storefront.storage.port import KeyValueStore

logger = structlog.get_logger(__name__)


@dataclass
class Storefront:
    settings: StorefrontSettings
    cart_store: CartStore
    checkout: CheckoutController
    submitter: OrderSubmitter

    async def place_order(self) -> str | None:
        return await self.submitter.submit(self.checkout)


def build_storefront(
    settings: StorefrontSettings | None = None,
    *,
    storage: KeyValueStore | None = None,
    order_service: OrderService | None = None,
    identity: IdentityProvider | None = None,
    navigation: NavigationSignal | None = None,
) -> Storefront:
    """Wire the core services; unspecified collaborators default to the fakes."""
    settings = settings or StorefrontSettings()
    storage = storage or create_store(settings)

    cart_store = CartStore(storage, key=settings.storage_key)
    cart_store.load()

    checkout = CheckoutController(cart_store, identity or StaticIdentityProvider(), settings)
    submitter = OrderSubmitter(
        cart_store,
        order_service or FakeOrderService(),
        navigation or RecordingNavigationSignal(),
    )

    logger.info(
        "Storefront ready",
        storage=type(storage).__name__,
        storage_key=settings.storage_key,
        cart_items=cart_store.totals().total_items,
    )
    return Storefront(settings=settings, cart_store=cart_store, checkout=checkout, submitter=submitter)
