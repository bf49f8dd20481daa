from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ecocart.config import settings
from ecocart.errors import OrderNotFound
from ecocart.models import CartEntry, Item, Order
from ecocart.services.catalog import Catalog, CatalogClient
from ecocart.services.rewards import total_eco_points, total_price
from ecocart.utils.validators import require_int_quantity, require_positive_quantity

logger = logging.getLogger(__name__)


class CartService:
    """
    The single shopping cart of the process plus its order log.

    One lock guards the cart, the order log and the order-id counter.
    Catalog lookups happen before the lock is taken.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self._lock = threading.Lock()
        self._cart: Dict[int, CartEntry] = {}
        self._orders: List[Order] = []
        self._next_order_id = 1

    def _snapshot(self) -> Dict[int, CartEntry]:
        # entries are frozen, a shallow copy of the map is enough
        return dict(self._cart)

    def _put(self, item_id: int, entry: CartEntry) -> CartEntry:
        # touched entries move to the end of the listing order
        self._cart.pop(item_id, None)
        self._cart[item_id] = entry
        return entry

    def snapshot(self) -> Dict[int, CartEntry]:
        with self._lock:
            return self._snapshot()

    def add(self, item_id: int, quantity: int = 1) -> Dict[int, CartEntry]:
        require_positive_quantity(quantity)

        item: Optional[Item] = None
        while True:
            with self._lock:
                entry = self._cart.get(item_id)
                if entry is not None:
                    # already in the cart: keep the stored item, add quantity
                    entry = self._put(item_id, entry.with_quantity(entry.quantity + quantity))
                elif item is not None:
                    entry = self._put(item_id, CartEntry(item=item, quantity=quantity))
                if entry is not None:
                    logger.info("cart add: item=%s qty=+%s now=%s", item_id, quantity, entry.quantity)
                    return self._snapshot()
            item = self.catalog.get_item(item_id)

    def update_quantity(self, item_id: int, quantity: int) -> Dict[int, CartEntry]:
        require_int_quantity(quantity)
        with self._lock:
            entry = self._cart.get(item_id)
            if entry is None:
                return self._snapshot()
            if quantity <= 0:
                del self._cart[item_id]
                logger.info("cart update: item=%s removed (qty=%s)", item_id, quantity)
            else:
                self._put(item_id, entry.with_quantity(quantity))
                logger.info("cart update: item=%s qty=%s", item_id, quantity)
            return self._snapshot()

    def remove(self, item_id: int) -> Dict[int, CartEntry]:
        with self._lock:
            if self._cart.pop(item_id, None) is not None:
                logger.info("cart remove: item=%s", item_id)
            return self._snapshot()

    def checkout(
        self,
        claimed_total: Optional[float] = None,
        claimed_eco_points: Optional[int] = None,
        claimed_items: Optional[Dict[int, int]] = None,
    ) -> Order:
        """
        Freeze the cart into an order and empty it.

        Totals are always computed from the cart itself. Totals and lines
        (item id -> quantity) sent by the caller are only compared and a
        mismatch is logged.
        """
        with self._lock:
            entries = tuple(self._snapshot().values())
            order = Order(
                id=self._next_order_id,
                items=entries,
                total_amount=total_price(entries),
                eco_points=total_eco_points(entries),
                created_at=datetime.now(timezone.utc),
            )
            self._next_order_id += 1
            self._orders.append(order)
            self._cart = {}

        if claimed_total is not None and round(claimed_total, settings.decimals) != order.total_amount:
            logger.warning(
                "order %s: client total %s differs from computed %s",
                order.id, claimed_total, order.total_amount,
            )
        if claimed_eco_points is not None and claimed_eco_points != order.eco_points:
            logger.warning(
                "order %s: client eco points %s differ from computed %s",
                order.id, claimed_eco_points, order.eco_points,
            )
        if claimed_items is not None:
            computed = {e.item.id: e.quantity for e in order.items}
            if claimed_items != computed:
                logger.warning(
                    "order %s: client items %s differ from cart %s",
                    order.id, claimed_items, computed,
                )
        logger.info(
            "order %s created: items=%s total=%s eco_points=%s",
            order.id, len(order.items), order.total_amount, order.eco_points,
        )
        return order

    def orders(self) -> List[Order]:
        with self._lock:
            return list(self._orders)

    def get_order(self, order_id: int) -> Order:
        with self._lock:
            for order in self._orders:
                if order.id == order_id:
                    return order
        raise OrderNotFound(f"order {order_id} not found")


def build_service() -> CartService:
    client = CatalogClient(settings.catalog_url, settings.catalog_timeout)
    return CartService(Catalog(client))
