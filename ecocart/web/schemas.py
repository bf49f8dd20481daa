from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CartAddRequest(_Body):
    product_id: int = Field(alias="productId")
    quantity: int = 1


class CartUpdateRequest(_Body):
    product_id: int = Field(alias="productId")
    quantity: int


class CartRemoveRequest(_Body):
    product_id: int = Field(alias="productId")


class ClaimedProduct(_Body):
    id: int


class ClaimedLine(_Body):
    product: ClaimedProduct
    quantity: int


class CheckoutRequest(_Body):
    # what the client believes it is buying; only used to detect mismatches
    items: Optional[List[ClaimedLine]] = None
    total_amount: Optional[float] = Field(default=None, alias="totalAmount")
    eco_points: Optional[int] = Field(default=None, alias="ecoPoints")

    def claimed_items(self) -> Optional[Dict[int, int]]:
        if self.items is None:
            return None
        lines: Dict[int, int] = {}
        for line in self.items:
            lines[line.product.id] = lines.get(line.product.id, 0) + line.quantity
        return lines
