# app/schemas/cart.py
from typing import List

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.bookings import LineItemIn

MAX_QUANTITY = 10


class CartItem(CamelModel):
    service_id: str
    name: str
    price: float
    quantity: int = Field(1, ge=1, le=MAX_QUANTITY)


class Cart(CamelModel):
    """Services a customer has picked, held by the caller between requests."""

    items: List[CartItem] = Field(default_factory=list)

    def _find(self, service_id: str):
        for item in self.items:
            if item.service_id == service_id:
                return item
        return None

    def add(self, service: dict, quantity: int = 1) -> CartItem:
        """Add a catalog service (a serialized service document)."""
        item = self._find(service["id"])
        if item is None:
            item = CartItem(service_id=service["id"], name=service["name"], price=service["price"], quantity=1)
            self.items.append(item)
            quantity -= 1
        item.quantity = _clamp(item.quantity + quantity)
        return item

    def remove(self, service_id: str):
        self.items = [item for item in self.items if item.service_id != service_id]

    def update_quantity(self, service_id: str, quantity: int):
        if quantity <= 0:
            self.remove(service_id)
            return
        item = self._find(service_id)
        if item is not None:
            item.quantity = _clamp(quantity)

    def clear(self):
        self.items = []

    @property
    def total_price(self) -> float:
        return round(sum(item.price * item.quantity for item in self.items), 2)

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def service_ids(self) -> List[str]:
        return [item.service_id for item in self.items]

    def line_items(self) -> List[LineItemIn]:
        return [LineItemIn(service_id=item.service_id, quantity=item.quantity) for item in self.items]


def _clamp(quantity: int) -> int:
    return max(1, min(MAX_QUANTITY, quantity))
