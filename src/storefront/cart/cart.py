"""Cart aggregate — the customer's selected products and quantities.

The cart holds exactly one CartItem per product. Each item is a snapshot of
the product's display and pricing fields taken when it was first added, so
later catalogue price changes never reach an item already in the cart.
Quantities never drop below one: setting a quantity below one removes the
item instead.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.cart.product import Product
from storefront.cart.snapshot import CartLine, CartSnapshot, CartTotals
from storefront.domain import storefront


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    image_ref = String(max_length=1024)
    category = String(max_length=100)
    stock_quantity = Integer(min_value=0, default=0)  # Display only; quantity is not capped by stock
    product_created_at = DateTime()
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@storefront.aggregate
class Cart:
    items = HasMany(CartItem)
    updated_at = DateTime()

    @invariant.post
    def one_item_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        return cls(updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self) -> float:
        return sum(item.price * item.quantity for item in self.items)

    def totals(self) -> CartTotals:
        return CartTotals(total_items=self.total_items, total_price=self.total_price)

    def to_snapshot(self) -> CartSnapshot:
        lines = tuple(
            CartLine(
                product_id=str(item.product_id),
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                image_ref=item.image_ref or "",
                category=item.category or "",
            )
            for item in self.items
        )
        return CartSnapshot(lines=lines, totals=self.totals())

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product: Product, quantity: int = 1) -> None:
        """Add a product to the cart (or increase its quantity if already present)."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        existing = self.find_item(product.id)

        if existing:
            existing.quantity += quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product.id,
                    name=product.name,
                    description=product.description,
                    price=product.price,
                    image_ref=product.image_ref,
                    category=product.category,
                    stock_quantity=product.stock_quantity,
                    product_created_at=product.created_at,
                    quantity=quantity,
                    added_at=now,
                )
            )

        self.updated_at = now

    def update_item_quantity(self, product_id, quantity: int) -> bool:
        """Overwrite an item's quantity; below one removes the item.

        Returns False when the product is not in the cart.
        """
        if quantity < 1:
            return self.remove_item(product_id)

        item = self.find_item(product_id)
        if item is None:
            return False

        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        return True

    def remove_item(self, product_id) -> bool:
        """Remove a product from the cart. Returns False when it was absent."""
        item = self.find_item(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        return True

    def clear(self) -> None:
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

    def restore_item(self, item: CartItem) -> None:
        """Put a previously persisted item back, merging duplicates of one product."""
        existing = self.find_item(item.product_id)
        if existing:
            existing.quantity += item.quantity
        else:
            self.add_items(item)
