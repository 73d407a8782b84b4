"""Navigation signal port.

The checkout core renders nothing. When an order is placed it raises a
signal that the hosting shell's navigation layer turns into a redirect.
"""

from abc import ABC, abstractmethod

ORDER_SUCCESS_FLAG = "order=success"


class NavigationSignal(ABC):
    @abstractmethod
    def order_placed(self, order_id: str) -> None:
        """Signal that ``order_id`` was placed successfully."""
        ...
