from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Union

from ecocart.config import settings
from ecocart.constants import (
    GOLD_POINTS,
    MILESTONE_POINTS,
    SILVER_POINTS,
    TIER_BRONZE,
    TIER_GOLD,
    TIER_SILVER,
    TIERS,
)
from ecocart.models import CartEntry, RewardTier

Cart = Union[Mapping[int, CartEntry], Iterable[CartEntry]]


def _entries(cart: Cart) -> list[CartEntry]:
    if isinstance(cart, Mapping):
        return list(cart.values())
    return list(cart)


def total_items(cart: Cart) -> int:
    return sum(e.quantity for e in _entries(cart))


def total_price(cart: Cart) -> float:
    total = sum(e.quantity * e.item.price for e in _entries(cart))
    return round(total, settings.decimals)


def total_eco_points(cart: Cart) -> int:
    return sum(e.quantity * e.item.eco_points for e in _entries(cart))


def average_score(cart: Cart) -> int:
    entries = _entries(cart)
    count = total_items(entries)
    if count <= 0:
        return 0
    weighted = sum(e.quantity * e.item.score for e in entries)
    # half rounds up, not to even
    return int(math.floor(weighted / count + 0.5))


def reward_tier(points: int) -> RewardTier:
    if points >= GOLD_POINTS:
        name = TIER_GOLD
    elif points >= SILVER_POINTS:
        name = TIER_SILVER
    else:
        name = TIER_BRONZE
    perk, color = TIERS[name]
    return RewardTier(name=name, perk=perk, color=color)


def progress_to_next_milestone(points: int, threshold: int = MILESTONE_POINTS) -> float:
    return min(points / threshold * 100, 100.0)


def crossed_milestone(old_points: int, new_points: int, threshold: int = MILESTONE_POINTS) -> bool:
    return old_points < threshold <= new_points


def summarize(cart: Cart) -> Dict[str, Any]:
    """Reward panel for the current cart, recomputed on every call."""
    entries = _entries(cart)
    points = total_eco_points(entries)
    return {
        "totalItems": total_items(entries),
        "totalPrice": total_price(entries),
        "ecoPoints": points,
        "averageScore": average_score(entries),
        "tier": reward_tier(points).to_dict(),
        "progress": progress_to_next_milestone(points),
        "milestone": MILESTONE_POINTS,
        "milestoneReached": points >= MILESTONE_POINTS,
    }
