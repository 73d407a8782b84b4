"""Configurable fake order service for development and testing.

Simulates the order backend without any external calls. It can be
configured to succeed, reject, or raise, and can hold calls open until
released, which lets tests observe a submission while it is in flight.
"""

import asyncio
from uuid import uuid4

from storefront.cart.snapshot import CartSnapshot
from storefront.checkout.session import ShippingInfo
from storefront.orders.port import OrderResult, OrderService


class FakeOrderService(OrderService):
    """Configurable fake order service."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_code: str = "order_rejected"
        self.failure_reason: str = "Order rejected"
        self.fault: Exception | None = None
        self.delay: float = 0.0
        self.calls: list[dict] = []
        self._gate: asyncio.Event | None = None

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Order rejected",
        failure_code: str = "order_rejected",
    ) -> None:
        """Configure service behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.failure_code = failure_code

    def fail_with(self, fault: Exception) -> None:
        """Raise ``fault`` from the next calls instead of returning a result."""
        self.fault = fault

    def hold(self) -> None:
        """Keep subsequent calls suspended until release() is called."""
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def place_order(self, cart: CartSnapshot, shipping_info: ShippingInfo) -> OrderResult:
        self.calls.append(
            {
                "method": "place_order",
                "cart": cart,
                "shipping_info": shipping_info,
            }
        )

        if self._gate is not None:
            await self._gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)

        if self.fault is not None:
            raise self.fault
        if self.should_succeed:
            return OrderResult.placed(f"fake_ord_{uuid4().hex[:12]}")
        return OrderResult.rejected(self.failure_code, self.failure_reason)
