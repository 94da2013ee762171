"""Product repository interface.

Extends ``IRepository`` with the catalog queries: substring search,
brand aggregation and the bulk operations used by the seed loader.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Iterable, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest
    from modules.products.dtos import BrandCountDTO, ProductInputDTO
    from modules.products.models import Product


class IProductRepository(IRepository["Product", "ProductInputDTO"]):
    """Repository contract for the Product entity."""

    @abstractmethod
    def search(self, term: str, page_request: PageRequest) -> Page[Product]:
        """Page of products whose name, brand or model contains ``term``
        (case-insensitive)."""

    @abstractmethod
    def brand_summary(self) -> List[BrandCountDTO]:
        """One row per distinct brand with its product count."""

    @abstractmethod
    def count(self) -> int:
        """Total number of stored products."""

    @abstractmethod
    def bulk_create(self, items: Iterable[ProductInputDTO]) -> int:
        """Insert many products at once; returns the number inserted."""
