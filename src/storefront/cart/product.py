"""Product values handed over by the catalogue collaborator.

The catalogue owns products; the cart only ever receives already-resolved,
immutable Product values and copies the fields it needs at add time.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Product:
    """A catalogue product as seen by the cart."""

    id: str
    name: str
    price: float
    description: str = ""
    image_ref: str = ""
    category: str = ""
    stock_quantity: int = 0
    created_at: datetime | None = None
