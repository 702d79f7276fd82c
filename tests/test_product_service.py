import pytest
from decimal import Decimal
from uuid import uuid4

from app.core.exceptions import NotFoundError, InvalidArgumentError, InsufficientStockError
from app.models import InventoryMovement, MovementReason
from app.schemas.product import ProductCreate, StockAdjustment, StockAdjustmentType
from app.services import ProductService, PriceService


class TestCreateProduct:

    def test_starts_with_zero_stock_and_a_current_price(self, db, supplier, current_price_count):
        product = ProductService.create_product(db, ProductCreate(
            sku="SKU-001", name="Widget", supplier_id=supplier.id,
            purchase_price=Decimal("6.00"), selling_price=Decimal("9.50"),
        ))

        assert product.current_stock == 0
        assert product.is_active is True
        assert current_price_count(product.id) == 1
        assert PriceService.get_current_price(db, product.id).selling_price == Decimal("9.50")

    def test_without_price(self, db, supplier, current_price_count):
        product = ProductService.create_product(db, ProductCreate(
            sku="SKU-002", name="Gadget", supplier_id=supplier.id,
        ))

        assert current_price_count(product.id) == 0

    def test_unknown_supplier(self, db):
        with pytest.raises(NotFoundError) as exc:
            ProductService.create_product(db, ProductCreate(sku="SKU-003", name="Ghost", supplier_id=uuid4()))
        assert exc.value.entity == "Supplier"

    def test_prices_come_in_pairs(self, db, supplier):
        with pytest.raises(InvalidArgumentError):
            ProductService.create_product(db, ProductCreate(
                sku="SKU-004", name="Half priced", supplier_id=supplier.id,
                selling_price=Decimal("9.50"),
            ))

    def test_max_below_min(self, db, supplier):
        with pytest.raises(InvalidArgumentError):
            ProductService.create_product(db, ProductCreate(
                sku="SKU-005", name="Bounded", supplier_id=supplier.id,
                min_quantity=10, max_quantity=5,
            ))


class TestAdjustStock:

    def test_increase_records_an_entry(self, db, make_product, user, assert_ledger_consistent):
        product = make_product(stock=3)

        adjusted = ProductService.adjust_stock(db, product.id, StockAdjustment(
            type=StockAdjustmentType.INCREASE, quantity=4, notes="found in back room",
        ), user.id)

        assert adjusted.current_stock == 7
        movement = db.query(InventoryMovement).filter(
            InventoryMovement.reference_type == "ADJUSTMENT"
        ).one()
        assert movement.movement_type == "ENTRY"
        assert movement.reason == MovementReason.ADJUSTMENT
        assert movement.notes == "found in back room"
        assert_ledger_consistent(product.id)

    def test_decrease(self, db, make_product, user, assert_ledger_consistent):
        product = make_product(stock=3)

        adjusted = ProductService.adjust_stock(db, product.id, StockAdjustment(
            type=StockAdjustmentType.DECREASE, quantity=3, reason="DAMAGED",
        ), user.id)

        assert adjusted.current_stock == 0
        movement = db.query(InventoryMovement).filter(InventoryMovement.reason == "DAMAGED").one()
        assert movement.movement_type == "EXIT"
        assert_ledger_consistent(product.id)

    def test_decrease_below_zero(self, db, make_product, user, assert_ledger_consistent):
        product = make_product(stock=2)

        with pytest.raises(InsufficientStockError, match="Available: 2"):
            ProductService.adjust_stock(db, product.id, StockAdjustment(
                type=StockAdjustmentType.DECREASE, quantity=3,
            ), user.id)

        db.expire_all()
        assert ProductService.get_product(db, product.id).current_stock == 2
        assert_ledger_consistent(product.id)

    def test_unknown_product(self, db):
        with pytest.raises(NotFoundError):
            ProductService.adjust_stock(db, uuid4(), StockAdjustment(
                type=StockAdjustmentType.INCREASE, quantity=1,
            ))

    def test_unknown_user(self, db, make_product, assert_ledger_consistent):
        product = make_product(stock=2)

        with pytest.raises(NotFoundError) as exc:
            ProductService.adjust_stock(db, product.id, StockAdjustment(
                type=StockAdjustmentType.INCREASE, quantity=1,
            ), uuid4())

        assert exc.value.entity == "User"
        db.expire_all()
        assert ProductService.get_product(db, product.id).current_stock == 2
        assert_ledger_consistent(product.id)


class TestQueries:

    def test_search_and_active_filter(self, db, make_product):
        make_product(name="Blue Mug")
        make_product(name="Red Mug")
        hidden = make_product(name="Green Mug")
        hidden.is_active = False
        db.commit()

        products, total = ProductService.get_products(db, search="mug")
        assert total == 2

        products, total = ProductService.get_products(db, search="mug", active_only=False)
        assert total == 3

    def test_stock_status_report(self, db, make_product):
        low = make_product(stock=1, min_quantity=5, purchase_price="2.00", selling_price="3.00")
        high = make_product(stock=20, min_quantity=1, max_quantity=10, purchase_price="1.50", selling_price="2.00")
        optimal = make_product(stock=5, min_quantity=5, max_quantity=5, purchase_price="4.00", selling_price="6.00")

        report = ProductService.get_stock_status_report(db)

        assert [p.id for p in report["low_stock"]] == [low.id]
        assert [p.id for p in report["high_stock"]] == [high.id]
        assert [p.id for p in report["optimal_stock"]] == [optimal.id]
        summary = report["summary"]
        assert summary["total_products"] == 3
        assert summary["total_stock"] == 26
        assert summary["total_stock_value"] == Decimal("52.00")
        assert summary["low_stock_count"] == 1
