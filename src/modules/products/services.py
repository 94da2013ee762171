"""Product service layer (Use Cases).

Orchestrates the catalog use-cases, delegating persistence to the injected
``IProductRepository``.  Input is validated upstream (``validation.py``);
a missing product is reported as a value (``None`` or ``Err(NOT_FOUND)``),
never raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

import structlog
from django.db import transaction

from modules.core.result import Err

if TYPE_CHECKING:
    from modules.core.pagination import Page, PageRequest
    from modules.core.result import Result
    from modules.products.dtos import BrandCountDTO, ProductInputDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: ProductInputDTO) -> Product:
        product = self._repo.create(dto)
        logger.info("product.created", product_key=product.product_key, brand=product.brand)
        return product

    def update_product(self, key: int, dto: ProductInputDTO) -> Result[Product]:
        """Overwrite every field of product ``key``.

        Returns ``Err(NOT_FOUND)`` if the product does not exist.
        """
        result = self._repo.update(key, dto)
        if isinstance(result, Err):
            logger.warning("product.not_found", product_key=key, action="update")
        else:
            logger.info("product.updated", product_key=key)
        return result

    def delete_product(self, key: int) -> Result[None]:
        """Remove product ``key``.

        Returns ``Err(NOT_FOUND)`` if the product does not exist.
        """
        result = self._repo.delete(key)
        if isinstance(result, Err):
            logger.warning("product.not_found", product_key=key, action="delete")
        else:
            logger.info("product.deleted", product_key=key)
        return result

    @transaction.atomic
    def import_products(self, dtos: Iterable[ProductInputDTO]) -> int:
        """Insert a batch of validated products, all or nothing."""
        created = self._repo.bulk_create(dtos)
        logger.info("product.imported", count=created)
        return created

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_or_search(
        self, page_request: PageRequest, search: Optional[str] = None
    ) -> Page[Product]:
        """Search when ``search`` has non-blank text, otherwise list."""
        term = search.strip() if search else ""
        if not term:
            return self._repo.list(page_request)
        return self._repo.search(term, page_request)

    def get_product(self, key: int) -> Optional[Product]:
        return self._repo.get_by_key(key)

    def brand_summary(self) -> List[BrandCountDTO]:
        return self._repo.brand_summary()

    def count_products(self) -> int:
        return self._repo.count()
