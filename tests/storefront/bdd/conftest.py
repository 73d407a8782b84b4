"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from pytest_bdd import given, parsers, then
from storefront.checkout.session import CheckoutStep


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured submission errors."""
    return {"exc": None}


@pytest.fixture()
def products(lamp, mug):
    return {product.id: product for product in (lamp, mug)}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('{quantity:d} of "{product_id}" are in the cart'))
@given(parsers.cfparse('{quantity:d} of "{product_id}" is in the cart'))
def products_in_cart(cart_store, products, quantity, product_id):
    cart_store.add(products[product_id], quantity)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart holds {count:d} items"))
@then(parsers.cfparse("the cart holds {count:d} item"))
def cart_holds(cart_store, count):
    assert cart_store.totals().total_items == count


@then("the cart is empty")
def cart_is_empty(cart_store):
    assert cart_store.is_empty
    assert cart_store.totals().total_price == 0.0


@then(parsers.cfparse('checkout is at the "{step}" step'))
def checkout_at_step(controller, step):
    assert controller.step == CheckoutStep(step)
