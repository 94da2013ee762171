from django.apps import AppConfig
from django.db.models.signals import post_migrate


class ProductsConfig(AppConfig):
    name = "modules.products"
    label = "products"
    verbose_name = "Product catalog"

    def ready(self) -> None:
        from modules.products.signals import seed_catalog_after_migrate

        post_migrate.connect(seed_catalog_after_migrate, sender=self)
