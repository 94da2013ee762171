"""Unit tests for ProductDjangoRepository.

Covers:
- CRUD operations (get_by_key, create, update, delete).
- Paging: slice bounds, totals, default and explicit ordering.
- Case-insensitive substring search over name, brand and model.
- Brand summary aggregation, count and bulk_create.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.core.pagination import PageRequest, SortOrder
from modules.core.result import Err, ErrorKind, Ok
from modules.products.dtos import ProductInputDTO
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


def _dto(**overrides) -> ProductInputDTO:
    data = {
        "retailer": "Acme",
        "brand": "Zed",
        "model": "Z1",
        "product_name": "Zed Z1",
        "price": "19.99",
    }
    data.update(overrides)
    return ProductInputDTO.model_validate(data)


# ===========================================================================
# Instantiation
# ===========================================================================


class TestRepositoryInstantiation:
    def test_is_instance_of_interface(self, repo):
        assert isinstance(repo, IProductRepository)


# ===========================================================================
# get_by_key / create
# ===========================================================================


class TestGetByKey:
    def test_returns_product_when_found(self, repo, make_product):
        product = make_product()
        result = repo.get_by_key(product.product_key)
        assert result is not None
        assert result.product_key == product.product_key

    def test_returns_none_when_not_found(self, repo):
        assert repo.get_by_key(999999) is None


class TestCreate:
    def test_assigns_key(self, repo):
        product = repo.create(_dto())
        assert product.product_key is not None
        assert product.product_key > 0
        assert Product.objects.filter(product_key=product.product_key).exists()

    def test_keys_are_unique(self, repo):
        first = repo.create(_dto())
        second = repo.create(_dto())
        assert first.product_key != second.product_key

    def test_persists_all_fields(self, repo):
        product = repo.create(_dto(product_description="Compact"))
        product.refresh_from_db()
        assert product.retailer == "Acme"
        assert product.brand == "Zed"
        assert product.model == "Z1"
        assert product.name == "Zed Z1"
        assert product.description == "Compact"
        assert product.price == Decimal("19.99")


# ===========================================================================
# update / delete
# ===========================================================================


class TestUpdate:
    def test_overwrites_every_field(self, repo, make_product):
        product = make_product(description="Old")
        result = repo.update(
            product.product_key,
            _dto(retailer="Shop", brand="Acme", model="A2", product_name="Acme A2", price="5.50"),
        )
        assert isinstance(result, Ok)
        product.refresh_from_db()
        assert product.retailer == "Shop"
        assert product.brand == "Acme"
        assert product.model == "A2"
        assert product.name == "Acme A2"
        assert product.description is None
        assert product.price == Decimal("5.50")

    def test_keeps_key(self, repo, make_product):
        product = make_product()
        result = repo.update(product.product_key, _dto(product_key=777))
        assert result.value.product_key == product.product_key

    def test_missing_key_returns_not_found(self, repo):
        result = repo.update(424242, _dto())
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.NOT_FOUND
        assert "424242" in result.message


class TestDelete:
    def test_removes_existing_product(self, repo, make_product):
        product = make_product()
        result = repo.delete(product.product_key)
        assert isinstance(result, Ok)
        assert not Product.objects.filter(product_key=product.product_key).exists()

    def test_missing_key_returns_not_found(self, repo):
        result = repo.delete(424242)
        assert isinstance(result, Err)
        assert result.kind is ErrorKind.NOT_FOUND


# ===========================================================================
# list
# ===========================================================================


class TestList:
    def test_empty_store(self, repo):
        page = repo.list(PageRequest(page=0, size=10))
        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0

    def test_slices_in_insertion_order(self, repo, make_product):
        keys = [make_product(name=f"P{i}").product_key for i in range(5)]
        page = repo.list(PageRequest(page=1, size=2))
        assert [p.product_key for p in page.items] == keys[2:4]
        assert page.total == 5
        assert page.total_pages == 3

    def test_page_past_the_end_is_empty(self, repo, make_product):
        make_product()
        page = repo.list(PageRequest(page=5, size=10))
        assert page.items == []
        assert page.total == 1

    def test_huge_page_number_is_empty(self, repo, make_product):
        make_product()
        page = repo.list(PageRequest(page=10**18, size=200))
        assert page.items == []
        assert page.total == 1
        assert page.total_pages == 1

    def test_exact_multiple_of_size(self, repo, make_product):
        for i in range(4):
            make_product(name=f"P{i}")
        assert repo.list(PageRequest(size=2)).total_pages == 2

    def test_explicit_sort(self, repo, make_product):
        make_product(price=Decimal("5.00"))
        make_product(price=Decimal("50.00"))
        make_product(price=Decimal("20.00"))
        page = repo.list(PageRequest(size=10, sort=(SortOrder("price", descending=True),)))
        assert [p.price for p in page.items] == [
            Decimal("50.00"),
            Decimal("20.00"),
            Decimal("5.00"),
        ]

    def test_ties_broken_by_key(self, repo, make_product):
        keys = [make_product(brand="Same").product_key for _ in range(3)]
        page = repo.list(PageRequest(size=10, sort=(SortOrder("brand"),)))
        assert [p.product_key for p in page.items] == keys


# ===========================================================================
# search
# ===========================================================================


class TestSearch:
    @pytest.fixture()
    def catalog(self, make_product):
        return {
            "by_name": make_product(name="Ultra Blender", brand="Kitch", model="K1"),
            "by_brand": make_product(name="Toaster", brand="BLENDCO", model="T2"),
            "by_model": make_product(name="Mixer", brand="Mixo", model="blend-9"),
            "other": make_product(name="Kettle", brand="Hot", model="H1", description="blend"),
        }

    def test_matches_name_brand_and_model_case_insensitively(self, repo, catalog):
        page = repo.search("Blend", PageRequest(size=10))
        keys = {p.product_key for p in page.items}
        assert keys == {
            catalog["by_name"].product_key,
            catalog["by_brand"].product_key,
            catalog["by_model"].product_key,
        }
        assert page.total == 3

    def test_description_is_not_searched(self, repo, catalog):
        page = repo.search("blend", PageRequest(size=10))
        assert catalog["other"].product_key not in {p.product_key for p in page.items}

    def test_results_are_a_subset_of_list(self, repo, catalog):
        everything = {p.product_key for p in repo.list(PageRequest(size=100)).items}
        found = {p.product_key for p in repo.search("e", PageRequest(size=100)).items}
        assert found <= everything

    def test_search_is_paged(self, repo, catalog):
        page = repo.search("blend", PageRequest(page=1, size=2))
        assert len(page.items) == 1
        assert page.total == 3
        assert page.total_pages == 2

    def test_no_match(self, repo, catalog):
        page = repo.search("nothing-like-this", PageRequest(size=10))
        assert page.items == []
        assert page.total == 0


# ===========================================================================
# brand_summary / count / bulk_create
# ===========================================================================


class TestBrandSummary:
    def test_counts_per_brand(self, repo, make_product):
        make_product(brand="Zed")
        make_product(brand="Zed")
        make_product(brand="Acme")
        rows = repo.brand_summary()
        assert {(r.brand, r.count) for r in rows} == {("Zed", 2), ("Acme", 1)}

    def test_counts_sum_to_total(self, repo, make_product):
        for brand in ["A", "B", "B", "C", "C", "C"]:
            make_product(brand=brand)
        rows = repo.brand_summary()
        assert sum(r.count for r in rows) == repo.count() == 6
        assert len({r.brand for r in rows}) == len(rows)

    def test_empty_store(self, repo):
        assert repo.brand_summary() == []


class TestBulkCreate:
    def test_inserts_all(self, repo):
        created = repo.bulk_create([_dto(model="A"), _dto(model="B")])
        assert created == 2
        assert repo.count() == 2
