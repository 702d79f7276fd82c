import pytest
from uuid import uuid4

from app.core.exceptions import NotFoundError
from app.models import Product
from app.services import StockService


class TestAdjustStock:

    def test_positive_and_negative_deltas_return_updated_stock(self, db, make_product):
        product = make_product(stock=10)

        assert StockService.adjust_stock(db, product.id, 5) == 15
        assert StockService.adjust_stock(db, product.id, -12) == 3

    def test_does_not_commit_on_its_own(self, db, make_product):
        product = make_product(stock=10)

        StockService.adjust_stock(db, product.id, -4)
        db.rollback()

        assert db.get(Product, product.id).current_stock == 10

    def test_only_the_counter_changes(self, db, make_product):
        product = make_product(stock=2, min_quantity=1, max_quantity=50)
        before = (product.sku, product.name, product.min_quantity, product.max_quantity)

        StockService.adjust_stock(db, product.id, 3)
        db.commit()
        db.refresh(product)

        assert (product.sku, product.name, product.min_quantity, product.max_quantity) == before
        assert product.current_stock == 5

    def test_unknown_product(self, db):
        with pytest.raises(NotFoundError) as exc:
            StockService.adjust_stock(db, uuid4(), 1)
        assert exc.value.entity == "Product"


class TestLockProduct:

    def test_returns_fresh_row(self, db, make_product):
        product = make_product(stock=7)
        product.current_stock = 999  # stale in-memory value, never flushed

        locked = StockService.lock_product(db, product.id)

        assert locked is product
        assert locked.current_stock == 7

    def test_unknown_product(self, db):
        with pytest.raises(NotFoundError):
            StockService.lock_product(db, uuid4())
