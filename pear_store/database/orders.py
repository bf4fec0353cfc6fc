"""Order storage for the lifetime of the process"""

from dataclasses import dataclass
from typing import Optional

from ..models.order import Order, OrderTracking, StatusUpdate


@dataclass
class OrderRecord:
    """A placed order and the timeline its progression appends to"""
    order: Order
    updates: list[StatusUpdate]

    def tracking(self) -> OrderTracking:
        return OrderTracking.build(self.order, self.updates)


class OrderDatabase:
    """In-memory order storage"""

    def __init__(self):
        self.orders: dict[str, OrderRecord] = {}

    def save(self, order: Order, updates: list[StatusUpdate]) -> OrderRecord:
        """Store an order; ``updates`` is kept by reference so it stays current"""
        record = OrderRecord(order=order, updates=updates)
        self.orders[order.order_id] = record
        return record

    def get_order(self, order_id: str) -> Optional[OrderRecord]:
        """Get an order by ID"""
        return self.orders.get(order_id)

    def list_orders(self, limit: int = 50) -> list[OrderRecord]:
        """List recent orders"""
        records = list(self.orders.values())
        records.sort(key=lambda r: r.order.created_at, reverse=True)
        return records[:limit]


# Singleton instance
order_db = OrderDatabase()
