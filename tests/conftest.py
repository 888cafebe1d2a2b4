import mongomock
import pytest
from fastapi.testclient import TestClient

from db import get_db
from main import app
from models import ROLE_ADMIN, USERS
from routers.auth import COOKIE_NAME, create_access_token


@pytest.fixture
def db():
    return mongomock.MongoClient().db


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    # Not entered as a context manager, so startup never opens a real connection
    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    def _login(email="user@example.com"):
        client.cookies.set(COOKIE_NAME, create_access_token({"email": email}))
        return email

    return _login


@pytest.fixture
def admin(db, login):
    db[USERS].insert_one({"email": "admin@example.com", "role": ROLE_ADMIN})
    return login("admin@example.com")
