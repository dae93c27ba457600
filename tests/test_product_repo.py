"""Tests for ProductRepo stock adjustments."""

import pytest

from backoffice.data.database import atomic
from backoffice.domain.errors import InsufficientStockError, NotFoundError
from backoffice.repos.product_repo import ProductRepo
from tests.helpers import stock_of


class TestGetProduct:

    def test_returns_product(self, db, make_product):
        product = make_product(name="Keyboard")
        found = ProductRepo(db).get_product(product.id)
        assert found.name == "Keyboard"

    def test_missing_product_is_none(self, db):
        assert ProductRepo(db).get_product(999) is None


class TestAdjustStock:

    def test_decrement(self, db, make_product):
        product = make_product(stock=5)
        with atomic(db):
            new_stock = ProductRepo(db).adjust_stock(product.id, -3)
        assert new_stock == 2
        assert stock_of(db, product.id) == 2

    def test_increment(self, db, make_product):
        product = make_product(stock=2)
        with atomic(db):
            ProductRepo(db).adjust_stock(product.id, 3)
        assert stock_of(db, product.id) == 5

    def test_decrement_to_zero_is_allowed(self, db, make_product):
        product = make_product(stock=4)
        with atomic(db):
            assert ProductRepo(db).adjust_stock(product.id, -4) == 0

    def test_refuses_to_go_negative(self, db, make_product):
        product = make_product(name="Mouse", stock=2)
        with pytest.raises(InsufficientStockError) as exc:
            with atomic(db):
                ProductRepo(db).adjust_stock(product.id, -3)
        assert exc.value.available == 2
        assert exc.value.requested == 3
        assert "Mouse" in str(exc.value)
        assert stock_of(db, product.id) == 2

    def test_missing_product(self, db):
        with pytest.raises(NotFoundError) as exc:
            with atomic(db):
                ProductRepo(db).adjust_stock(999, -1)
        assert exc.value.entity == "product"

    def test_repeated_decrements_stop_at_zero(self, db, make_product):
        product = make_product(stock=5)
        repo = ProductRepo(db)
        failures = 0
        for _ in range(4):
            try:
                with atomic(db):
                    repo.adjust_stock(product.id, -2)
            except InsufficientStockError:
                failures += 1
        assert failures == 2
        assert stock_of(db, product.id) == 1

    def test_does_not_commit_on_its_own(self, db, make_product):
        product = make_product(stock=5)
        ProductRepo(db).adjust_stock(product.id, -5)
        db.rollback()
        assert stock_of(db, product.id) == 5


class TestCatalogQueries:

    def test_low_stock_only_active_sorted(self, db, make_product):
        make_product(name="A", stock=3)
        make_product(name="B", stock=1)
        make_product(name="C", stock=50)
        make_product(name="D", stock=0, is_active=False)
        names = [p.name for p in ProductRepo(db).low_stock(5)]
        assert names == ["B", "A"]

    def test_categories_distinct_active_non_empty(self, db, make_product):
        make_product(category="peripherals")
        make_product(category="peripherals")
        make_product(category="displays")
        make_product(category="")
        make_product(category="hidden", is_active=False)
        assert ProductRepo(db).categories() == ["displays", "peripherals"]

    def test_find_active_by_name_ignores_inactive(self, db, make_product):
        make_product(name="Old", is_active=False)
        assert ProductRepo(db).find_active_by_name("Old") is None
