import logging
import random

import pytest
from fastapi.testclient import TestClient

from ecocart.services.cart import CartService
from ecocart.services.catalog import Catalog
from ecocart.web.main import create_app
from factories import FakeCatalogClient, make_record


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def records():
    return [
        make_record(1, 10.0, "Bamboo toothbrush", category="home"),
        make_record(2, 5.0, "Organic cotton bag", category="bags"),
        make_record(3, 109.95, "Solar lantern", category="electronics"),
    ]


@pytest.fixture
def fake_client(records):
    return FakeCatalogClient(records)


@pytest.fixture
def catalog(fake_client, rng):
    return Catalog(fake_client, rng)


@pytest.fixture
def service(catalog):
    return CartService(catalog)


@pytest.fixture
def client(service):
    with TestClient(create_app(service)) as c:
        yield c


@pytest.fixture
def log_capture(caplog):
    caplog.set_level(logging.INFO, logger="ecocart")
    return caplog
