# routers/users.py
from typing import Optional

from fastapi import APIRouter
from pymongo import ReturnDocument

from db import DatabaseDep, serialize, serialize_all, update_result
from models import ROLE_ADMIN, USERS, new_user
from schemas import UserProfile
from .auth import AdminDep, CurrentUserDep

router = APIRouter(tags=["users"])


@router.post("/users/{email}")
def save_user(email: str, db: DatabaseDep, profile: Optional[UserProfile] = None):
    """
    Store a user on first sign-in. Signing in again returns
    the stored document untouched.
    """
    fields = profile.model_dump(mode="json", exclude_none=True) if profile else {}
    user = db[USERS].find_one_and_update(
        {"email": email},
        {"$setOnInsert": new_user(email, fields)},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return serialize(user)


@router.get("/users/role/{email}")
def get_user_role(email: str, db: DatabaseDep, current: CurrentUserDep):
    user = db[USERS].find_one({"email": email}, {"role": 1})
    return {"role": user.get("role") if user else None}


@router.get("/users")
def list_users(db: DatabaseDep, admin: AdminDep):
    """
    List all users (admin).
    """
    return serialize_all(db[USERS].find())


@router.patch("/users/role/{email}")
def make_admin(email: str, db: DatabaseDep, admin: AdminDep):
    result = db[USERS].update_one({"email": email}, {"$set": {"role": ROLE_ADMIN}})
    return update_result(result)
