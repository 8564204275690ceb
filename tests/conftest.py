import os

# cấu hình phải có trước khi import app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from werkzeug.security import generate_password_hash

from app import app as flask_app
from configs import db
from db.models.user import User, UserRole
from dao import supplier as supplier_dao, product as product_dao


@pytest.fixture(scope="session")
def app():
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def database(app):
    with app.app_context():
        db.create_all()
        yield db
        db.session.remove()
        db.drop_all()


@pytest.fixture
def user(database):
    u = User(
        email="dentist@clinic.local",
        password_hash=generate_password_hash("secret"),
        full_name="Dr. Test",
        role=UserRole.DENTIST,
    )
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def supplier(database):
    return supplier_dao.create_supplier(
        name="Dentaire Distribution",
        phone="0102030405",
        email="contact@dentaire.fr",
        customer_reference="CLI-1",
    )


@pytest.fixture
def make_product(supplier):
    counter = {"n": 0}

    def _make(name=None, sku=None, sale_price=10, reorder_point=5, **kw):
        counter["n"] += 1
        n = counter["n"]
        return product_dao.create_product(
            sku=sku or f"SKU-{n}",
            name=name or f"Product {n}",
            category=kw.pop("category", "implants"),
            supplier_id=supplier.id,
            unit_cost=kw.pop("unit_cost", 1),
            sale_price=sale_price,
            reorder_point=reorder_point,
            reorder_quantity=kw.pop("reorder_quantity", 10),
            **kw,
        )

    return _make


@pytest.fixture
def client(app, database, user):
    c = app.test_client()
    c.post(
        "/auth/login",
        data={"email": "dentist@clinic.local", "password": "secret"},
    )
    return c
