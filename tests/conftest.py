from datetime import datetime, timedelta

import pytest
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash

from inventory_app import create_app
from inventory_app.config import Config
from inventory_app.extensions import db
from inventory_app.models.category import Category
from inventory_app.models.item import Item
from inventory_app.models.user import User


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    NOTIFY_BY_MAIL = False
    MAIL_SUPPRESS_SEND = True


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(email="user@example.com", password="secret123", role=User.ROLE_USER,
              name="Test User", is_restricted=False):
        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            is_restricted=is_restricted,
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role=User.ROLE_ADMIN, name="Admin")


def headers_for(user):
    token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(user):
    return headers_for(user)


@pytest.fixture
def admin_headers(admin):
    return headers_for(admin)


@pytest.fixture
def category(app):
    c = Category(name="Laptops", description="Portable computers")
    db.session.add(c)
    db.session.commit()
    return c


@pytest.fixture
def make_item(category):
    def _make(name="ThinkPad", quantity=1, status=Item.STATUS_AVAILABLE):
        item = Item(name=name, category_id=category.id, quantity=quantity, status=status)
        db.session.add(item)
        db.session.commit()
        return item
    return _make


@pytest.fixture
def item(make_item):
    return make_item()


def loan_dates(days=7):
    start = datetime.utcnow().date()
    return start.isoformat(), (start + timedelta(days=days)).isoformat()
