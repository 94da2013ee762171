"""Product model, the single catalog entity.

Field constraints (lengths, price range and precision) are enforced by the
validation layer before a write; the column definitions mirror them so the
table cannot hold values the API would reject.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

RETAILER_MAX_LENGTH = 100
BRAND_MAX_LENGTH = 100
MODEL_MAX_LENGTH = 100
NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class Product(models.Model):
    """A catalog product.

    ``product_key`` is assigned by the database on insert and never
    changes afterwards.
    """

    product_key = models.BigAutoField(primary_key=True)
    retailer = models.CharField(max_length=RETAILER_MAX_LENGTH)
    brand = models.CharField(max_length=BRAND_MAX_LENGTH)
    model = models.CharField(max_length=MODEL_MAX_LENGTH)
    name = models.CharField(max_length=NAME_MAX_LENGTH)
    description = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01
    price = models.DecimalField(max_digits=8, decimal_places=2)

    class Meta:
        db_table = "products"
        ordering = ["product_key"]
        indexes = [
            models.Index(fields=["brand"], name="products_brand_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=Decimal("0.01")),
                name="products_price_min",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.brand} {self.model} - {self.name}"
