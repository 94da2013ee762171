from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, List

import structlog
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from modules.products.dtos import ProductInputDTO
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.products.validation import validate_product

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    help = (
        "Load products from a JSON array file when the catalog is empty. "
        "Runs automatically after migrate unless PRODUCT_SEED_ON_MIGRATE is off. "
        "Any malformed record aborts the load and nothing is inserted."
    )

    def add_arguments(self, parser) -> None:
        parser.add_argument(
            "--path",
            default=None,
            help="JSON file to load (defaults to the PRODUCT_SEED_FILE setting).",
        )

    def handle(self, *args, **options) -> None:
        path = Path(options["path"] or settings.PRODUCT_SEED_FILE)
        service = ProductService(repository=ProductDjangoRepository())

        existing = service.count_products()
        if existing:
            logger.info("seed.skipped", reason="catalog_not_empty", existing=existing)
            self.stdout.write(
                self.style.WARNING(f"Catalog already has {existing} products, skipping.")
            )
            return

        if not path.exists():
            logger.warning("seed.file_missing", path=str(path))
            self.stdout.write(self.style.WARNING(f"Seed file {path} not found, skipping."))
            return

        records = self._read_records(path)
        dtos = self._validate(records)
        created = service.import_products(dtos)

        logger.info("seed.loaded", path=str(path), count=created)
        self.stdout.write(self.style.SUCCESS(f"Loaded {created} products from {path}."))

    @staticmethod
    def _read_records(path: Path) -> List[Any]:
        try:
            with path.open(encoding="utf-8") as fh:
                records = json.load(fh, parse_float=Decimal)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("seed.unreadable", path=str(path), error=str(exc))
            raise CommandError(f"Could not read seed file {path}: {exc}") from exc
        if not isinstance(records, list):
            raise CommandError(f"Seed file {path} must contain a JSON array.")
        return records

    @staticmethod
    def _validate(records: List[Any]) -> List[ProductInputDTO]:
        problems = []
        dtos = []
        for index, record in enumerate(records):
            violations = validate_product(record)
            if violations:
                detail = ", ".join(f"{v.field}: {v.message}" for v in violations)
                problems.append(f"record {index}: {detail}")
                continue
            dtos.append(ProductInputDTO.model_validate(record))

        if problems:
            logger.error("seed.invalid_records", count=len(problems))
            raise CommandError("Seed file has invalid records; " + "; ".join(problems))
        return dtos
