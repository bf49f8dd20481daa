import random
import logging

import pytest

from ecocart.errors import MalformedUpstreamRecord
from ecocart.services.enrichment import enrich, enrich_many
from factories import make_record


@pytest.mark.unit
def test_enrich_maps_fields(rng):
    item = enrich(make_record(7, 12.5, "Steel bottle", category="kitchen"), rng)
    assert item.id == 7
    assert item.name == "Steel bottle"
    assert item.price == 12.5
    assert item.category == "kitchen"
    assert item.image == "https://img.example/7.jpg"
    assert item.in_stock is True
    assert 70 <= item.score <= 90
    assert 50 <= item.eco_points <= 199


@pytest.mark.unit
def test_optional_fields_may_be_missing(rng):
    item = enrich({"id": 1, "title": "Bare", "price": 1}, rng)
    assert item.image is None and item.description is None and item.category is None


@pytest.mark.unit
def test_synthetic_metrics_stay_in_range_over_many_draws():
    r = random.Random(0)
    items = [enrich(make_record(i), r) for i in range(500)]
    assert {i.score for i in items} <= set(range(70, 91))
    assert {i.eco_points for i in items} <= set(range(50, 200))
    # both bounds are reachable
    assert min(i.score for i in items) == 70 and max(i.score for i in items) == 90


@pytest.mark.unit
def test_seeded_rng_is_repeatable():
    a = enrich(make_record(1), random.Random(99))
    b = enrich(make_record(1), random.Random(99))
    assert (a.score, a.eco_points) == (b.score, b.eco_points)


@pytest.mark.unit
@pytest.mark.parametrize(
    "record",
    [
        {"title": "no id", "price": 1},
        {"id": 1, "price": 1},
        {"id": 1, "title": "no price"},
        {"id": 1, "title": "bad price", "price": "free"},
        {"id": 1, "title": "negative", "price": -3},
        {"id": 1, "title": "nan", "price": float("nan")},
        {"id": 1, "title": "nan text", "price": "nan"},
        {"id": 1, "title": "inf", "price": float("inf")},
        {"id": 1, "title": "inf text", "price": "inf"},
        {"id": 1.7, "title": "fractional id", "price": 1},
        {"id": "1.7", "title": "fractional id text", "price": 1},
        {"id": True, "title": "bool id", "price": 1},
        "not a record",
    ],
    ids=[
        "no-id", "no-title", "no-price", "text-price", "negative-price",
        "nan-price", "nan-text-price", "inf-price", "inf-text-price",
        "fractional-id", "fractional-id-text", "bool-id", "not-mapping",
    ],
)
def test_malformed_record_is_rejected(record, rng):
    with pytest.raises(MalformedUpstreamRecord):
        enrich(record, rng)


@pytest.mark.unit
def test_enrich_many_skips_bad_records(rng, caplog):
    caplog.set_level(logging.WARNING)
    records = [make_record(1), {"id": 2, "price": 3}, make_record(3)]
    items = enrich_many(records, rng)
    assert [i.id for i in items] == [1, 3]
    assert "skipping catalog record" in caplog.text


@pytest.mark.unit
def test_integral_float_id_is_accepted(rng):
    assert enrich({"id": 4.0, "title": "whole", "price": 1}, rng).id == 4
