from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Item:
    id: int
    name: str
    price: float
    score: int
    eco_points: int
    image: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    in_stock: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "description": self.description,
            "category": self.category,
            "score": self.score,
            "ecoPoints": self.eco_points,
            "inStock": self.in_stock,
        }


@dataclass(frozen=True)
class CartEntry:
    item: Item
    quantity: int

    def with_quantity(self, quantity: int) -> "CartEntry":
        return replace(self, quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        return {"product": self.item.to_dict(), "quantity": self.quantity}


@dataclass(frozen=True)
class Order:
    id: int
    items: Tuple[CartEntry, ...]
    total_amount: float
    eco_points: int
    created_at: datetime = field(compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "items": [e.to_dict() for e in self.items],
            "totalAmount": self.total_amount,
            "ecoPoints": self.eco_points,
            "date": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class RewardTier:
    name: str
    perk: str
    color: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "perk": self.perk, "color": self.color}


def cart_to_dict(cart: Dict[int, CartEntry]) -> Dict[str, Any]:
    # JSON object keys are strings
    return {str(item_id): entry.to_dict() for item_id, entry in cart.items()}
