"""Pytest fixtures for laundry service tests."""

import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EVENTS_ENABLED"] = "false"
os.environ["ADMIN_PASSWORD"] = "test-admin-pass"
os.environ["ENFORCE_COLLECTION_SCHEDULE"] = "false"
os.environ["NOTIFICATION_CHANNEL"] = "console"
os.environ["EMAIL_SERVICE"] = "console"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from laundry_service import models  # noqa: F401
from laundry_service.database import Base, SessionLocal, engine
from laundry_service.main import app
from laundry_service.models.catalog import Category, Item, ServiceType, ItemPrice
from laundry_service.models.order import Order
from laundry_service.repositories.user_repository import RoleRepository


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def signup(client):
    """Create an account through the API and return (user_id, token)."""
    counter = {"n": 0}

    def _signup(gender="male", email=None, **profile):
        counter["n"] += 1
        body = {
            "email": email or f"student{counter['n']}@campus.edu",
            "password": "password123",
            "student_name": profile.pop("student_name", f"Student {counter['n']}"),
            "mobile_no": profile.pop("mobile_no", "9876543210"),
            "room_number": profile.pop("room_number", "B-101"),
            "gender": gender,
            **profile,
        }
        response = client.post("/auth/signup", json=body)
        assert response.status_code == 201, response.text
        data = response.json()
        return data["user_id"], data["access_token"]

    return _signup


@pytest.fixture
def customer(signup):
    return signup(gender="male")


@pytest.fixture
def admin(signup, db_session):
    user_id, token = signup(gender="female", email="warden@campus.edu")
    RoleRepository(db_session).replace_role(user_id, "admin")
    return user_id, token


@pytest.fixture
def catalog(db_session):
    """Seed a small catalog: two items under one service type."""
    men = Category(name="Men", slug="men", emoji="👔", display_order=1)
    db_session.add(men)
    db_session.flush()
    shirt = Item(name="Shirt", category_id=men.id, emoji="👕", display_order=1)
    trousers = Item(name="Trousers", category_id=men.id, emoji="👖", display_order=2)
    wash = ServiceType(name="Regular Wash", emoji="🫧", display_order=1)
    db_session.add_all([shirt, trousers, wash])
    db_session.flush()
    shirt_price = ItemPrice(item_id=shirt.id, service_type_id=wash.id, price=20.0)
    trousers_price = ItemPrice(item_id=trousers.id, service_type_id=wash.id, price=30.0)
    db_session.add_all([shirt_price, trousers_price])
    db_session.commit()
    return {
        "category": men.id,
        "shirt": shirt.id,
        "trousers": trousers.id,
        "wash": wash.id,
        "shirt_price": shirt_price.id,
    }


@pytest.fixture
def order_payload(catalog):
    def _payload(shirts=2, trousers=1):
        items = []
        if shirts:
            items.append({"item_id": catalog["shirt"], "service_type_id": catalog["wash"], "quantity": shirts})
        if trousers:
            items.append({"item_id": catalog["trousers"], "service_type_id": catalog["wash"], "quantity": trousers})
        return {
            "customer": {"student_name": "Ravi Kumar", "student_id": "S123", "mobile_no": "9876543210"},
            "items": items,
            "payment_method": "cash",
        }

    return _payload


@pytest.fixture
def make_order(db_session, customer):
    """Insert an order row directly."""
    counter = {"n": 0}

    def _make(**fields):
        counter["n"] += 1
        values = {
            "order_number": f"LND{counter['n']:08d}",
            "user_id": customer[0],
            "customer_name": f"Customer {counter['n']}",
            "customer_phone": "9876543210",
            "customer_gender": "male",
            "total_amount": 50.0,
            "status": "pending",
            "batch_status": "pending",
            "created_at": datetime(2026, 10, 12, 5, 0, tzinfo=timezone.utc),
        }
        values.update(fields)
        order = Order(**values)
        db_session.add(order)
        db_session.commit()
        db_session.refresh(order)
        return order

    return _make
