"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Service
results that carry an ``Err`` are turned into ``ApiError`` here and
rendered by ``modules.core.exceptions.custom_exception_handler``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ApiError
from modules.core.pagination import parse_page_request
from modules.core.result import Err, ErrorKind
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import BrandSummarySerializer, ProductSerializer
from modules.products.services import ProductService
from modules.products.validation import parse_product

# Wire name (and the camelCase names older clients send) -> model field
SORTABLE_FIELDS = {
    "product_key": "product_key",
    "productKey": "product_key",
    "retailer": "retailer",
    "brand": "brand",
    "model": "model",
    "product_name": "name",
    "productName": "name",
    "product_description": "description",
    "productDescription": "description",
    "price": "price",
}


def parse_product_key(raw: Optional[str]) -> int:
    """Path keys must be positive integers written as plain ASCII digits."""
    if not raw or not (raw.isascii() and raw.isdigit()):
        raise ApiError.bad_parameter("Parameter 'product_key' should be of type int")
    key = int(raw)
    if key <= 0:
        raise ApiError.bad_parameter("Parameter 'product_key' must be positive")
    return key


def parse_search_term(raw: Optional[str]) -> Optional[str]:
    """Trimmed search text, ``None`` when blank."""
    term = (raw or "").strip()
    if not term:
        return None
    if len(term) > settings.SEARCH_MAX_LENGTH:
        raise ApiError.bad_parameter(
            f"Parameter 'search' must be at most {settings.SEARCH_MAX_LENGTH} characters"
        )
    if len(term) < settings.SEARCH_MIN_LENGTH:
        raise ApiError.bad_parameter(
            f"Parameter 'search' must be at least {settings.SEARCH_MIN_LENGTH} characters"
        )
    return term


class ProductViewSet(GenericViewSet):
    """ViewSet for the product catalog.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    pagination_class = None
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /products?page=&size=&sort=&search="""
        page_request = parse_page_request(request.query_params, SORTABLE_FIELDS)
        search = parse_search_term(request.query_params.get("search"))

        page = self._service.list_or_search(page_request, search)
        content = ProductSerializer(page.items, many=True).data
        return Response(page.envelope(content))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /products/{pk}"""
        key = parse_product_key(pk)
        product = self._service.get_product(key)
        if product is None:
            raise ApiError(ErrorKind.NOT_FOUND, f"Product not found with key: {key}")
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"], url_path="brand-summary")
    def brand_summary(self, request: Request) -> Response:
        """GET /products/brand-summary"""
        rows = self._service.brand_summary()
        return Response(BrandSummarySerializer(rows, many=True).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /products"""
        dto = self._validated_body(request)
        product = self._service.create_product(dto)
        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /products/{pk}"""
        key = parse_product_key(pk)
        dto = self._validated_body(request)

        result = self._service.update_product(key, dto)
        if isinstance(result, Err):
            raise ApiError.from_err(result)
        return Response(ProductSerializer(result.value).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /products/{pk}"""
        key = parse_product_key(pk)
        result = self._service.delete_product(key)
        if isinstance(result, Err):
            raise ApiError.from_err(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validated_body(request: Request):
        if not isinstance(request.data, Mapping):
            raise ApiError.bad_parameter("Request body must be a JSON object")
        result = parse_product(request.data)
        if isinstance(result, Err):
            raise ApiError.from_err(result)
        return result.value
