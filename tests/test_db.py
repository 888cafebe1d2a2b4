import pytest
from fastapi import HTTPException
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from db import ensure_indexes, get_db, oid, serialize
from main import app


def test_user_email_is_unique(db):
    ensure_indexes(db)
    db["users"].insert_one({"email": "a@example.com", "role": "user"})
    with pytest.raises(DuplicateKeyError):
        db["users"].insert_one({"email": "a@example.com", "role": "admin"})


def test_oid_rejects_garbage():
    with pytest.raises(HTTPException) as exc:
        oid("123")
    assert exc.value.status_code == 400


def test_serialize_stringifies_ids(db):
    inserted = db["pets"].insert_one({"name": "Buddy"}).inserted_id
    doc = serialize(db["pets"].find_one())
    assert doc["_id"] == str(inserted)
    assert serialize(None) is None


def test_root(client):
    assert client.get("/").json() == {"message": "Paw Hope server is running"}


class _Reachable:
    def command(self, name):
        return {"ok": 1}

    def list_collection_names(self):
        return ["users", "pets"]


class _Unreachable:
    def command(self, name):
        raise ServerSelectionTimeoutError("no servers")


def test_health_connected(client):
    app.dependency_overrides[get_db] = lambda: _Reachable()
    body = client.get("/health").json()
    assert body["database"] == "connected"
    assert body["collections"] == ["pets", "users"]


def test_health_unreachable(client):
    app.dependency_overrides[get_db] = lambda: _Unreachable()
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["database"].startswith("error:")
