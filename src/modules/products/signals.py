"""Seed the catalog once migrations have run."""

from __future__ import annotations

from django.conf import settings
from django.core.management import call_command


def seed_catalog_after_migrate(sender, verbosity: int = 1, **kwargs) -> None:
    """Run ``load_products`` after ``migrate`` when seeding on migrate is on.

    The command itself skips a non-empty catalog and a missing seed file.
    """
    if not settings.PRODUCT_SEED_ON_MIGRATE:
        return
    call_command("load_products", verbosity=verbosity)
