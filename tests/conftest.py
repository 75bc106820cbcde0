import os

# Settings are read once at import time; point them at throwaway values.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from bakery.core.auth import create_access_token, hash_password
from bakery.database import Database, get_database
from bakery.main import app
from bakery.models.admin_user import AdminUser
from bakery.models.branch import Branch
from bakery.models.category import Category
from bakery.models.payment_method import PaymentMethod
from bakery.models.product import Product


@pytest.fixture
def db():
    database = Database("sqlite://", poolclass=StaticPool)
    database.create_all()
    app.dependency_overrides[get_database] = lambda: database
    yield database
    app.dependency_overrides.clear()
    database.dispose()


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def catalog(db):
    """
    Seed a small catalog and return the ids:
    one category, two available products, one unavailable product,
    an active and an inactive branch, an active and an inactive payment method.
    """
    with db.session() as session:
        bread = Category(name="Bread", description="Fresh every morning")
        session.add(bread)
        session.flush()

        croissant = Product(
            name="Croissant",
            description="Butter croissant",
            price=Decimal("25000"),
            category_id=bread.id,
        )
        baguette = Product(
            name="Baguette",
            description="Classic french baguette",
            price=Decimal("12500.50"),
            category_id=bread.id,
        )
        retired = Product(
            name="Old Bun",
            price=Decimal("9000"),
            category_id=bread.id,
            is_available=False,
        )
        branch = Branch(name="District 1", address="1 Le Loi", phone="0281234567")
        closed_branch = Branch(
            name="Closed", address="2 Hai Ba Trung", phone="0287654321", is_active=False
        )
        cod = PaymentMethod(name="Cash on delivery", code="cod")
        old_method = PaymentMethod(name="Voucher", code="voucher", is_active=False)

        session.add_all(
            [croissant, baguette, retired, branch, closed_branch, cod, old_method]
        )
        session.commit()

        return {
            "category": bread.id,
            "croissant": croissant.id,
            "baguette": baguette.id,
            "retired": retired.id,
            "branch": branch.id,
            "closed_branch": closed_branch.id,
            "payment": cod.id,
            "inactive_payment": old_method.id,
        }


def _make_admin(db: Database, username: str, role: str) -> AdminUser:
    with db.session() as session:
        admin = AdminUser(
            username=username,
            email=f"{username}@bakery.vn",
            password_hash=hash_password("secret123"),
            full_name=username.title(),
            role=role,
        )
        session.add(admin)
        session.commit()
        session.refresh(admin)
        return admin


@pytest.fixture
def admin_user(db):
    return _make_admin(db, "owner", "admin")


@pytest.fixture
def staff_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token(admin_user)}"}


@pytest.fixture
def manager_headers(db):
    manager = _make_admin(db, "manager", "manager")
    return {"Authorization": f"Bearer {create_access_token(manager)}"}


@pytest.fixture
def order_payload(catalog):
    """
    Factory for a valid checkout body: 2 croissants = 50000.
    """

    def make(**overrides):
        payload = {
            "items": [
                {
                    "product": {
                        "id": catalog["croissant"],
                        "name": "Croissant",
                        "price": 25000,
                    },
                    "quantity": 2,
                }
            ],
            "customerInfo": {
                "name": "Nguyen Van A",
                "phone": "0901234567",
                "email": "vana@bakery.vn",
                "address": "12 Nguyen Hue",
            },
            "branch_id": catalog["branch"],
            "payment_method_id": catalog["payment"],
            "total_amount": 50000,
            "notes": "Less sugar",
        }
        payload.update(overrides)
        return payload

    return make
