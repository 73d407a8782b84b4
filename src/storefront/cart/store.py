"""CartStore — the single owner of the cart and its persisted form.

Every mutation is written to the key-value store before the call returns, so
a later ``load()`` always observes the effect of every completed mutation.
Storage failures never escape: a failed load degrades to an empty cart and a
failed write leaves the in-memory cart authoritative until the next write.
"""

import structlog
from protean.exceptions import ValidationError

from storefront.cart import serialization
from storefront.cart.cart import Cart, CartItem
from storefront.cart.product import Product
from storefront.cart.snapshot import CartSnapshot, CartTotals
from storefront.config import CART_STORAGE_KEY
from storefront.storage.port import KeyValueStore, StorageError

logger = structlog.get_logger(__name__)


class CartStore:
    """Owns the Cart aggregate and persists it after every mutation.

    At most one CartStore should own a given storage key per process;
    two stores writing the same key would interleave their writes.
    """

    def __init__(self, storage: KeyValueStore, key: str = CART_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._cart = Cart.create()

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def items(self) -> list[CartItem]:
        return list(self._cart.items)

    @property
    def is_empty(self) -> bool:
        return not self._cart.items

    def get(self, product_id) -> CartItem | None:
        return self._cart.find_item(product_id)

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def load(self) -> Cart:
        """Restore the cart from storage, falling back to an empty cart."""
        try:
            raw = self._storage.load(self._key)
        except StorageError as exc:
            logger.warning("Could not read stored cart, starting empty", key=self._key, error=str(exc))
            self._cart = Cart.create()
            return self._cart

        if raw is None:
            logger.debug("No stored cart found", key=self._key)
            self._cart = Cart.create()
            return self._cart

        try:
            self._cart = serialization.loads(raw)
        except (serialization.CartDecodeError, ValidationError) as exc:
            logger.warning("Discarding malformed stored cart", key=self._key, error=str(exc))
            self._cart = Cart.create()
        else:
            logger.info("Cart restored", key=self._key, item_count=len(self._cart.items))
        return self._cart

    def _persist(self) -> None:
        try:
            self._storage.save(self._key, serialization.dumps(self._cart))
        except StorageError as exc:
            logger.error("Could not persist cart", key=self._key, error=str(exc))

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, product: Product, quantity: int = 1) -> None:
        self._cart.add_item(product, quantity)
        self._persist()
        logger.info("Added to cart", product_id=product.id, quantity=quantity)

    def remove(self, product_id) -> None:
        removed = self._cart.remove_item(product_id)
        self._persist()
        if removed:
            logger.info("Removed from cart", product_id=str(product_id))

    def set_quantity(self, product_id, quantity: int) -> None:
        if quantity < 1:
            self.remove(product_id)
            return

        self._cart.update_item_quantity(product_id, quantity)
        self._persist()

    def clear(self) -> None:
        self._cart.clear()
        self._persist()
        logger.info("Cart cleared", key=self._key)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def totals(self) -> CartTotals:
        return self._cart.totals()

    def snapshot(self) -> CartSnapshot:
        return self._cart.to_snapshot()
