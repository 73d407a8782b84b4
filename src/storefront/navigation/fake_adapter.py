"""Navigation signal that records what it was told, for development and testing."""

from storefront.navigation.port import ORDER_SUCCESS_FLAG, NavigationSignal


class RecordingNavigationSignal(NavigationSignal):
    def __init__(self, account_path: str = "/account") -> None:
        self.account_path = account_path
        self.placed_orders: list[str] = []

    def order_placed(self, order_id: str) -> None:
        self.placed_orders.append(order_id)

    @property
    def redirect_target(self) -> str | None:
        """Where the shell should navigate after the last placed order."""
        if not self.placed_orders:
            return None
        return f"{self.account_path}?{ORDER_SUCCESS_FLAG}"
