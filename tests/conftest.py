"""Pytest fixtures for backoffice tests."""

import os

# przed importem backoffice - settings czyta env przy imporcie
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from backoffice.data.database import Base, SessionLocal, engine, init_db
from backoffice.data.models import OrderModel, ProductModel, UserModel


@pytest.fixture(autouse=True)
def tables():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    from backoffice.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(email=None, first_name="Jan", last_name="Kowalski"):
        counter["n"] += 1
        user = UserModel(
            email=email or f"user{counter['n']}@example.com",
            first_name=first_name,
            last_name=last_name,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_product(db):
    counter = {"n": 0}

    def _make(name=None, price="10.00", stock=5, is_active=True, category=None):
        counter["n"] += 1
        product = ProductModel(
            name=name or f"Product {counter['n']}",
            price=Decimal(price),
            stock=stock,
            is_active=is_active,
            category=category,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def make_order(db, make_user, make_product):
    """Zamowienie utworzone przez OrderService (stan produktu jest zdejmowany)."""
    from backoffice.services.order_service import OrderService

    def _make(user=None, items=None):
        user = user or make_user()
        if items is None:
            items = [{"product_id": make_product().id, "quantity": 1}]
        order_id = OrderService(db).create_order(user.id, items)
        return db.get(OrderModel, order_id)

    return _make
