"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Misses are reported as values: ``get_by_key`` returns ``None`` and
``update`` / ``delete`` return ``Err(NOT_FOUND)``; the Service and API
layers decide how to present them.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from django.core.paginator import EmptyPage, Paginator
from django.db import transaction
from django.db.models import Count, Q, QuerySet

from modules.core.pagination import Page, PageRequest
from modules.core.result import Ok, Result, not_found
from modules.products.dtos import BrandCountDTO, ProductInputDTO
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

SEARCH_FIELDS = ("name", "brand", "model")


def _not_found_message(key: int) -> str:
    return f"Product not found with key: {key}"


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_key(self, key: int) -> Optional[Product]:
        return Product.objects.filter(product_key=key).first()

    def list(self, page_request: PageRequest) -> Page[Product]:
        return self._page(Product.objects.all(), page_request)

    def search(self, term: str, page_request: PageRequest) -> Page[Product]:
        """Match ``term`` as a case-insensitive substring of name, brand or model."""
        condition = Q()
        for field in SEARCH_FIELDS:
            condition |= Q(**{f"{field}__icontains": term})
        return self._page(Product.objects.filter(condition), page_request)

    @transaction.atomic
    def create(self, data: ProductInputDTO) -> Product:
        product = Product(**data.to_fields())
        product.save()
        return product

    @transaction.atomic
    def update(self, key: int, data: ProductInputDTO) -> Result[Product]:
        """Overwrite all mutable fields of ``key`` under a row lock."""
        product = Product.objects.select_for_update().filter(product_key=key).first()
        if product is None:
            return not_found(_not_found_message(key))
        for field, value in data.to_fields().items():
            setattr(product, field, value)
        product.save()
        return Ok(product)

    @transaction.atomic
    def delete(self, key: int) -> Result[None]:
        deleted, _ = Product.objects.filter(product_key=key).delete()
        if not deleted:
            return not_found(_not_found_message(key))
        return Ok(None)

    def brand_summary(self) -> List[BrandCountDTO]:
        rows = (
            Product.objects.order_by()
            .values("brand")
            .annotate(count=Count("product_key"))
            .order_by("-count", "brand")
        )
        return [BrandCountDTO(brand=row["brand"], count=row["count"]) for row in rows]

    def count(self) -> int:
        return Product.objects.count()

    @transaction.atomic
    def bulk_create(self, items: Iterable[ProductInputDTO]) -> int:
        created = Product.objects.bulk_create(
            [Product(**item.to_fields()) for item in items]
        )
        return len(created)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _page(queryset: QuerySet, page_request: PageRequest) -> Page[Product]:
        ordering = [order.to_ordering() for order in page_request.sort]
        if not any(o.lstrip("-") == "product_key" for o in ordering):
            ordering.append("product_key")
        queryset = queryset.order_by(*ordering)

        paginator = Paginator(queryset, page_request.size)
        try:
            items = list(paginator.page(page_request.page + 1).object_list)
        except EmptyPage:
            # Past the last page: empty content, totals still reported
            items = []
        return Page(
            items=items,
            total=paginator.count,
            total_pages=paginator.num_pages if paginator.count else 0,
            request=page_request,
        )
