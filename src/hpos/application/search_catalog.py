"""Application service: Search the product catalog (query)."""

from __future__ import annotations

from hpos.domain.model.product import Product
from hpos.domain.model.validation import validate_search_query
from hpos.domain.repository.product_repository import ProductRepository


class SearchCatalogHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, query: str | None = None, include_unavailable: bool = False) -> list[Product]:
        validate_search_query(query).raise_for_failure()

        needle = (query or "").strip().lower()
        return [
            p
            for p in self._product_repo.list_all()
            if (include_unavailable or p.available)
            and (not needle or needle in p.name.lower() or needle in p.description.lower())
        ]
