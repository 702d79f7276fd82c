"""
Pytest fixtures for the back office test suite.

Every test gets a fresh in-memory SQLite database (single shared connection
through StaticPool) with all tables created, plus directory rows and a
product factory that books opening stock through the movement ledger.
"""
import os

os.environ.setdefault("DATABASE_URI", "sqlite://")

import pytest
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import Base
from app.models import AppUser, Supplier, Client, Product, Price
from app.models.stock import MovementType, MovementReason
from app.schemas.product import ProductCreate
from app.schemas.stock import MovementCreate
from app.services import ProductService, MovementService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def user(db):
    user = AppUser(username="clerk", full_name="Store Clerk", email="clerk@example.com")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def supplier(db):
    supplier = Supplier(name="Acme Wholesale", contact_name="Ana", email="sales@acme.example")
    db.add(supplier)
    db.commit()
    return supplier


@pytest.fixture
def client(db):
    client = Client(name="Corner Shop", email="owner@corner.example")
    db.add(client)
    db.commit()
    return client


@pytest.fixture
def make_product(db, supplier, user):
    """
    Factory: product with an optional current price and opening stock.

    Opening stock is an ENTRY movement so the ledger and the counter agree
    from the start.
    """
    def _make(stock=0, selling_price="25.00", purchase_price="15.00", min_quantity=0, max_quantity=None, name=None):
        name = name or f"Product {uuid4().hex[:6]}"
        product = ProductService.create_product(db, ProductCreate(
            sku=f"SKU-{uuid4().hex[:8]}",
            name=name,
            supplier_id=supplier.id,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
            purchase_price=Decimal(purchase_price) if purchase_price else None,
            selling_price=Decimal(selling_price) if selling_price else None,
        ))
        if stock:
            MovementService.record(db, MovementCreate(
                movement_type=MovementType.ENTRY,
                quantity=stock,
                product_id=product.id,
                supplier_id=supplier.id,
                reason=MovementReason.INITIAL_STOCK,
            ), user.id)
            db.refresh(product)
        return product

    return _make


@pytest.fixture
def assert_ledger_consistent(db):
    """Check current_stock == sum(ENTRY) - sum(EXIT) for the given products"""
    def _check(*product_ids):
        db.expire_all()
        for product_id in product_ids:
            product = db.get(Product, product_id)
            assert product.current_stock == MovementService.get_net_quantity(db, product_id)
            assert product.current_stock >= 0

    return _check


@pytest.fixture
def current_price_count(db):
    def _count(product_id):
        return db.query(Price).filter(
            Price.product_id == product_id,
            Price.is_current_price == True,
        ).count()

    return _count
