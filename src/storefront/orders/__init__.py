from storefront.orders.fake_adapter import FakeOrderService
from storefront.orders.port import OrderError, OrderResult, OrderService

__all__ = ["FakeOrderService", "OrderError", "OrderResult", "OrderService"]
