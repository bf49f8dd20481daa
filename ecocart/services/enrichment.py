"""
Turns raw catalog records into ``Item`` objects.

Score and eco-points are synthetic: they are drawn at random every time a
record is enriched, so two enrichments of the same record usually differ.
Pass a seeded ``random.Random`` to get repeatable values.
"""
from __future__ import annotations

import logging
import math
import random
from typing import Any, Iterable, List, Mapping, Optional

from ecocart.constants import ECO_POINTS_MAX, ECO_POINTS_MIN, SCORE_MAX, SCORE_MIN
from ecocart.errors import MalformedUpstreamRecord
from ecocart.models import Item

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "title", "price")


def _parse_price(raw: Any) -> float:
    # bool is an int subclass, reject it explicitly
    if isinstance(raw, bool):
        raise ValueError("price must be a number")
    price = float(raw)
    if not math.isfinite(price) or price < 0:
        raise ValueError(f"price must be a finite number >= 0, got {raw!r}")
    return price


def _parse_id(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError("id must be an integer")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError(f"id must be an integer, got {raw!r}")
    return int(raw)


def enrich(record: Mapping[str, Any], rng: Optional[random.Random] = None) -> Item:
    if not isinstance(record, Mapping):
        raise MalformedUpstreamRecord(f"catalog record is not an object: {record!r}")

    missing = [k for k in REQUIRED_FIELDS if record.get(k) is None]
    if missing:
        raise MalformedUpstreamRecord(
            f"catalog record {record.get('id')!r} lacks {', '.join(missing)}"
        )

    try:
        item_id = _parse_id(record["id"])
        price = _parse_price(record["price"])
    except (TypeError, ValueError) as e:
        raise MalformedUpstreamRecord(f"catalog record {record.get('id')!r}: {e}") from e

    rng = rng or random
    return Item(
        id=item_id,
        name=str(record["title"]),
        price=price,
        image=record.get("image"),
        description=record.get("description"),
        category=record.get("category"),
        score=rng.randint(SCORE_MIN, SCORE_MAX),
        eco_points=rng.randint(ECO_POINTS_MIN, ECO_POINTS_MAX),
        in_stock=True,
    )


def enrich_many(records: Iterable[Mapping[str, Any]], rng: Optional[random.Random] = None) -> List[Item]:
    items: List[Item] = []
    for record in records:
        try:
            items.append(enrich(record, rng))
        except MalformedUpstreamRecord as e:
            logger.warning("skipping catalog record: %s", e.message)
    return items
