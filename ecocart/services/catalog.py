from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

import requests

from ecocart.config import settings
from ecocart.errors import MalformedUpstreamRecord, ProductNotFound, UpstreamUnavailable
from ecocart.models import Item
from ecocart.services.enrichment import enrich, enrich_many

logger = logging.getLogger(__name__)


class CatalogClient:
    """Thin HTTP client for the remote product catalog."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.catalog_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.catalog_timeout
        self.session = session or requests.Session()

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.exception("catalog request failed: GET %s", url)
            raise UpstreamUnavailable("catalog service is unavailable") from e

        if not resp.content or not resp.content.strip():
            return None
        try:
            return resp.json()
        except ValueError as e:
            logger.exception("catalog returned a non-JSON body: GET %s", url)
            raise UpstreamUnavailable("catalog service returned an invalid response") from e

    def fetch_products(self) -> List[Dict[str, Any]]:
        data = self._get("/products")
        if not isinstance(data, list):
            raise UpstreamUnavailable("catalog service returned an invalid product list")
        return data

    def fetch_product(self, product_id: int) -> Dict[str, Any]:
        data = self._get(f"/products/{product_id}")
        # the upstream answers unknown ids with 200 and an empty body
        if data is None:
            raise ProductNotFound(f"product {product_id} not found")
        if not isinstance(data, dict):
            raise MalformedUpstreamRecord(f"catalog record {product_id} is not an object")
        return data


class Catalog:
    """Fetches catalog records and enriches them into ``Item`` objects."""

    def __init__(self, client: CatalogClient, rng: Optional[random.Random] = None):
        self.client = client
        self.rng = rng or random.Random(settings.random_seed)

    def list_items(self, search: Optional[str] = None, category: Optional[str] = None) -> List[Item]:
        items = enrich_many(self.client.fetch_products(), self.rng)
        if search:
            needle = search.strip().lower()
            items = [i for i in items if needle in i.name.lower()]
        if category and category != "all":
            items = [i for i in items if i.category == category]
        return items

    def get_item(self, product_id: int) -> Item:
        item = enrich(self.client.fetch_product(product_id), self.rng)
        if item.id != product_id:
            raise MalformedUpstreamRecord(
                f"catalog returned product {item.id} when asked for {product_id}"
            )
        return item
