"""Order service port (abstract interface).

Defines the only confirmed contract with the backend that records orders.
The payload the backend stores is the adapter's business; the checkout core
hands over a cart snapshot and the shipping details and gets back either an
order identifier or an error.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.cart.snapshot import CartSnapshot
from storefront.checkout.session import ShippingInfo


@dataclass(frozen=True)
class OrderError:
    """Why an order could not be placed."""

    code: str
    message: str


@dataclass(frozen=True)
class OrderResult:
    """Result of an order placement attempt."""

    success: bool
    order_id: str | None = None
    error: OrderError | None = None

    @classmethod
    def placed(cls, order_id: str) -> "OrderResult":
        return cls(success=True, order_id=order_id)

    @classmethod
    def rejected(cls, code: str, message: str) -> "OrderResult":
        return cls(success=False, error=OrderError(code=code, message=message))


class OrderService(ABC):
    """Abstract order service interface."""

    @abstractmethod
    async def place_order(self, cart: CartSnapshot, shipping_info: ShippingInfo) -> OrderResult:
        """Place an order for the cart contents, shipped to ``shipping_info``."""
        ...
