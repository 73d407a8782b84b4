"""Shared fixtures for the storefront tests."""

import pytest
from storefront.cart.product import Product
from storefront.cart.store import CartStore
from storefront.checkout.controller import CheckoutController
from storefront.checkout.session import CheckoutStep
from storefront.checkout.submission import OrderSubmitter
from storefront.config import StorefrontSettings
from storefront.identity.fake_adapter import StaticIdentityProvider
from storefront.identity.port import User
from storefront.navigation.fake_adapter import RecordingNavigationSignal
from storefront.orders.fake_adapter import FakeOrderService
from storefront.storage.memory_adapter import InMemoryStore


# ---------------------------------------------------------------------------
# Catalogue values
# ---------------------------------------------------------------------------
@pytest.fixture()
def lamp():
    return Product(
        id="prod-001",
        name="Desk Lamp",
        price=24.5,
        description="Adjustable LED desk lamp",
        image_ref="images/lamp.jpg",
        category="Lighting",
        stock_quantity=12,
    )


@pytest.fixture()
def mug():
    return Product(id="prod-002", name="Coffee Mug", price=8.0, category="Kitchen", stock_quantity=40)


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def settings(tmp_path):
    return StorefrontSettings(environment="test", log_dir=tmp_path / "logs")


@pytest.fixture()
def storage():
    return InMemoryStore()


@pytest.fixture()
def cart_store(storage):
    store = CartStore(storage)
    store.load()
    return store


@pytest.fixture()
def user():
    return User(id="user-001", email="ada@example.com")


@pytest.fixture()
def identity(user):
    return StaticIdentityProvider(user)


@pytest.fixture()
def order_service():
    return FakeOrderService()


@pytest.fixture()
def navigation():
    return RecordingNavigationSignal()


@pytest.fixture()
def controller(cart_store, identity, settings):
    return CheckoutController(cart_store, identity, settings)


@pytest.fixture()
def submitter(cart_store, order_service, navigation):
    return OrderSubmitter(cart_store, order_service, navigation)


# ---------------------------------------------------------------------------
# Form data
# ---------------------------------------------------------------------------
@pytest.fixture()
def shipping_details():
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "address": "12 Analytical Way",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "email": "ada@example.com",
        "phone": "555-0100",
    }


@pytest.fixture()
def payment_details():
    return {
        "card_name": "Ada Lovelace",
        "card_number": "4242424242424242",
        "expiry_date": "1229",
        "cvv": "123",
    }


@pytest.fixture()
def at_review(controller, cart_store, lamp, shipping_details, payment_details):
    """A controller whose session sits at REVIEW with two lamps in the cart."""
    cart_store.add(lamp, 2)
    controller.begin()
    controller.update_shipping(**shipping_details)
    controller.next_step()
    controller.update_payment(**payment_details)
    controller.next_step()
    assert controller.step == CheckoutStep.REVIEW
    return controller
