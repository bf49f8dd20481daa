import pytest

from ecocart.services.rewards import reward_tier, summarize, total_eco_points


@pytest.mark.integration
def test_shopping_session_from_catalog_to_order(service, catalog):
    listed = {i.id: i for i in catalog.list_items()}
    assert set(listed) == {1, 2, 3}

    service.add(1, 2)
    service.add(2, 1)
    service.add(3, 1)
    service.update_quantity(3, 0)

    snap = service.snapshot()
    assert list(snap) == [1, 2]
    summary = summarize(snap)
    assert summary["totalItems"] == 3
    assert summary["totalPrice"] == 25.0

    order = service.checkout(claimed_total=25, claimed_eco_points=300)
    assert order.id == 1
    assert [(e.item.id, e.quantity) for e in order.items] == [(1, 2), (2, 1)]
    assert order.total_amount == 25.0
    assert order.eco_points == summary["ecoPoints"]
    assert service.snapshot() == {}

    service.add(2, 3)
    assert service.checkout().id == 2
    assert [o.id for o in service.orders()] == [1, 2]


@pytest.mark.integration
def test_tier_follows_cart_contents(service):
    service.add(1, 1)
    points = total_eco_points(service.snapshot())
    assert reward_tier(points).name == "Bronze"

    # eco points per unit are at least 50, so 20 units always reach Gold
    service.update_quantity(1, 20)
    assert reward_tier(total_eco_points(service.snapshot())).name == "Gold"

    service.remove(1)
    assert summarize(service.snapshot())["tier"]["name"] == "Bronze"
