"""Product DRF serializers for API output.

Input is validated by ``validation.py`` (Pydantic DTOs); these
serializers only render models and DTOs with the snake_case wire names.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    product_name = serializers.CharField(source="name")
    product_description = serializers.CharField(
        source="description", allow_null=True, required=False
    )

    class Meta:
        model = Product
        fields = [
            "product_key",
            "retailer",
            "brand",
            "model",
            "product_name",
            "product_description",
            "price",
        ]
        read_only_fields = ["product_key"]


class BrandSummarySerializer(serializers.Serializer):
    brand = serializers.CharField()
    count = serializers.IntegerField()
