"""Pytest fixtures for storefront tests."""

import os

# Settings are read at import time; keep the app off the real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront import models  # noqa: F401  registers tables
from storefront.database import Base, get_db
from storefront.models import CartItem, Discount, Order, OrderItem, OrderStatus, Product
from storefront.security import create_admin_token, create_customer_token

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Fresh schema and session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def foreign_keys(db_session):
    """Enforce foreign keys on the shared SQLite connection for one test."""
    db_session.execute(text("PRAGMA foreign_keys=ON"))
    db_session.commit()
    yield
    db_session.rollback()
    db_session.execute(text("PRAGMA foreign_keys=OFF"))
    db_session.commit()


@pytest.fixture
def client(db_session):
    """Test client whose requests share the test's session."""
    from storefront.main import app, rate_limiter

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    rate_limiter.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_admin_token(1, 'admin@example.com')}"}


@pytest.fixture
def customer_headers():
    """Build auth headers for a given customer id."""

    def _headers(customer_id=1, phone="0812345678"):
        return {"Authorization": f"Bearer {create_customer_token(customer_id, phone)}"}

    return _headers


@pytest.fixture
def make_product(db_session):
    def _make(name="Isan sausage", price=120.0, stock=10, cost_price=None, **kwargs):
        product = Product(name=name, price=price, stock=stock, cost_price=cost_price, **kwargs)
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


@pytest.fixture
def make_discount(db_session):
    def _make(code="SAVE10", discount_value=10, type="PERCENTAGE", **kwargs):
        discount = Discount(code=code, discount_value=discount_value, type=type, **kwargs)
        db_session.add(discount)
        db_session.commit()
        db_session.refresh(discount)
        return discount

    return _make


@pytest.fixture
def make_order(db_session):
    """
    Create an order directly in the database.

    items is a list of (product_or_product_id, quantity) pairs.
    """

    def _make(
        items=(),
        status=OrderStatus.PENDING,
        customer_id=None,
        phone="0812345678",
        total_amount=None,
        created_at=None,
        discount_code=None,
    ):
        lines = []
        subtotal = 0.0
        for product, quantity in items:
            if isinstance(product, Product):
                lines.append(OrderItem(
                    product_id=product.id,
                    quantity=quantity,
                    price=product.price,
                    cost_price=product.cost_price,
                ))
                subtotal += product.price * quantity
            else:
                lines.append(OrderItem(product_id=product, quantity=quantity, price=1.0))
                subtotal += quantity
        order = Order(
            customer_id=customer_id,
            customer_name="Somchai",
            phone=phone,
            address="99 Sukhumvit Rd, Bangkok",
            status=status.value if isinstance(status, OrderStatus) else status,
            total_amount=subtotal if total_amount is None else total_amount,
            discount_code=discount_code,
            items=lines,
        )
        if created_at is not None:
            order.created_at = created_at
        db_session.add(order)
        db_session.commit()
        db_session.refresh(order)
        return order

    return _make


@pytest.fixture
def fill_cart(db_session):
    """Put products into the cart for a session id (bypasses stock checks)."""
    from storefront.services.cart_service import CartService

    def _fill(session_id, lines):
        cart, _ = CartService(db_session).get_or_create(session_id)
        for product, quantity in lines:
            db_session.add(CartItem(cart_id=cart.id, product_id=product.id, quantity=quantity))
        db_session.commit()
        db_session.refresh(cart)
        return cart

    return _fill
