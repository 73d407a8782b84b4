"""Read-only views of the cart handed to checkout and the order service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CartTotals:
    total_items: int
    total_price: float


@dataclass(frozen=True)
class CartLine:
    """One cart item, frozen at the moment the snapshot was taken."""

    product_id: str
    name: str
    price: float
    quantity: int
    image_ref: str = ""
    category: str = ""

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class CartSnapshot:
    lines: tuple[CartLine, ...]
    totals: CartTotals

    @property
    def is_empty(self) -> bool:
        return not self.lines
