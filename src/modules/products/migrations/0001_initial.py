from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("product_key", models.BigAutoField(primary_key=True, serialize=False)),
                ("retailer", models.CharField(max_length=100)),
                ("brand", models.CharField(max_length=100)),
                ("model", models.CharField(max_length=100)),
                ("name", models.CharField(max_length=200)),
                (
                    "description",
                    models.TextField(blank=True, default=None, null=True),
                ),
                ("price", models.DecimalField(decimal_places=2, max_digits=8)),
            ],
            options={
                "db_table": "products",
                "ordering": ["product_key"],
                "indexes": [
                    models.Index(fields=["brand"], name="products_brand_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(price__gte=Decimal("0.01")),
                        name="products_price_min",
                    ),
                ],
            },
        ),
    ]
