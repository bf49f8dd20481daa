from dataclasses import replace
from datetime import datetime, timezone

import pytest

from ecocart.bot.handlers import milestone_text, render_cart, render_order, render_products
from ecocart.models import Order
from factories import make_entries, make_item


@pytest.mark.unit
def test_render_empty_cart():
    assert "Корзина пуста" in render_cart({})


@pytest.mark.unit
def test_render_cart_shows_tier_and_progress():
    entries = make_entries((10.0, 2, 150), (5.0, 1, 100))
    text = render_cart({e.item.id: e for e in entries})
    assert "400 / 500 Eco Points" in text
    assert "80%" in text
    assert "Bronze" in text
    assert "25.00 USD" in text


@pytest.mark.unit
def test_render_products_escapes_names():
    item = replace(make_item(1), name="<Tea & Co>")
    text = render_products([item])
    assert "&lt;Tea &amp; Co&gt;" in text


@pytest.mark.unit
def test_render_products_empty():
    assert render_products([]) == "Товары не найдены."


@pytest.mark.unit
def test_milestone_text_only_on_crossing():
    assert "Hurray" in milestone_text(450, 520)
    assert milestone_text(520, 600) is None


@pytest.mark.unit
def test_render_order():
    order = Order(id=3, items=(), total_amount=12.0, eco_points=80, created_at=datetime.now(timezone.utc))
    text = render_order(order)
    assert "#3" in text and "12.00 USD" in text
