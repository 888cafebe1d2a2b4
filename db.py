import logging
from typing import Annotated, Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, HTTPException, Request
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from config import get_settings
from models import (
    ADOPTION_REQUESTS,
    DONATION_CAMPAIGNS,
    DONATIONS,
    PETS,
    USERS,
)

logger = logging.getLogger(__name__)


def create_client() -> MongoClient:
    """Create the Mongo client; pymongo connects lazily on first use."""
    settings = get_settings()
    return MongoClient(settings.mongodb_uri)


def ensure_indexes(db: Database) -> None:
    """Create the unique user key and the lookup indexes used by the routers."""
    db[USERS].create_index([("email", ASCENDING)], unique=True)
    db[PETS].create_index([("petOwner.email", ASCENDING)])
    db[DONATION_CAMPAIGNS].create_index([("askerInfo.email", ASCENDING)])
    db[DONATIONS].create_index([("campaignId", ASCENDING)])
    db[DONATIONS].create_index([("donator.email", ASCENDING)])
    db[ADOPTION_REQUESTS].create_index([("petOwnerInfo", ASCENDING)])
    logger.info("Indexes ensured on database %s", db.name)


def get_db(request: Request) -> Database:
    """Hand the database attached on startup to a request."""
    return request.app.state.db


DatabaseDep = Annotated[Database, Depends(get_db)]


def oid(id_str: str) -> ObjectId:
    try:
        return ObjectId(id_str)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail="Invalid id format")


def serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not doc:
        return doc
    doc = dict(doc)
    for k, v in doc.items():
        if isinstance(v, ObjectId):
            doc[k] = str(v)
    return doc


def serialize_all(docs) -> List[Dict[str, Any]]:
    return [serialize(d) for d in docs]


def insert_result(result: InsertOneResult) -> Dict[str, Any]:
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def update_result(result: UpdateResult) -> Dict[str, Any]:
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
    }


def delete_result(result: DeleteResult) -> Dict[str, Any]:
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}
