"""Order summary shown on the review step."""

from dataclasses import dataclass

from storefront.cart.snapshot import CartTotals


@dataclass(frozen=True)
class OrderSummary:
    subtotal: float
    shipping_cost: float
    tax: float
    total: float
    currency: str = "USD"


def summarize(totals: CartTotals, tax_rate: float, shipping_cost: float = 0.0, currency: str = "USD") -> OrderSummary:
    """Price an order: tax applies to the subtotal only, shipping is flat."""
    subtotal = round(totals.total_price, 2)
    tax = round(subtotal * tax_rate, 2)
    return OrderSummary(
        subtotal=subtotal,
        shipping_cost=round(shipping_cost, 2),
        tax=tax,
        total=round(subtotal + shipping_cost + tax, 2),
        currency=currency,
    )
