import re
from typing import Literal, Optional

from fastapi import APIRouter, Query
from pymongo import ASCENDING, DESCENDING

from db import (
    DatabaseDep,
    delete_result,
    insert_result,
    oid,
    serialize,
    serialize_all,
    update_result,
)
from models import PET_PAGE_SIZE, PETS, new_pet
from schemas import AdoptStatus, PetCreate, PetUpdate, dump
from .auth import AdminDep, CurrentUserDep

router = APIRouter(tags=["pets"])


@router.get("/pets")
def list_pets(
    db: DatabaseDep,
    search: Optional[str] = None,
    category: Optional[str] = None,
    sort: Optional[Literal["asc", "desc"]] = None,
    page: Optional[int] = Query(default=None, ge=0),
):
    """
    List pets still up for adoption, optionally filtered by name
    and category, sorted by price and paged.
    """
    query = {"adopted": False}

    if search:
        query["name"] = {"$regex": re.escape(search), "$options": "i"}

    if category:
        query["category"] = category

    cursor = db[PETS].find(query)

    if sort == "asc":
        cursor = cursor.sort("price", ASCENDING)
    elif sort == "desc":
        cursor = cursor.sort("price", DESCENDING)
    else:
        cursor = cursor.sort("timestamp", DESCENDING)

    if page is not None:
        cursor = cursor.skip(page * PET_PAGE_SIZE).limit(PET_PAGE_SIZE)

    return serialize_all(cursor)


@router.get("/all-pets")
def list_all_pets(db: DatabaseDep, admin: AdminDep):
    return serialize_all(db[PETS].find().sort("timestamp", DESCENDING))


@router.get("/pets/{email}")
def list_owner_pets(email: str, db: DatabaseDep, current: CurrentUserDep):
    # Path email is not compared with the caller's identity
    return serialize_all(db[PETS].find({"petOwner.email": email}))


@router.get("/pet/{pet_id}")
def get_pet(pet_id: str, db: DatabaseDep):
    return serialize(db[PETS].find_one({"_id": oid(pet_id)}))


@router.post("/pets")
def create_pet(pet_in: PetCreate, db: DatabaseDep, current: CurrentUserDep):
    result = db[PETS].insert_one(new_pet(dump(pet_in)))
    return insert_result(result)


@router.put("/pets/{pet_id}")
def update_pet(pet_id: str, pet_in: PetUpdate, db: DatabaseDep, current: CurrentUserDep):
    result = db[PETS].update_one({"_id": oid(pet_id)}, {"$set": dump(pet_in)})
    return update_result(result)


@router.delete("/delete-pet/{pet_id}")
def delete_pet(pet_id: str, db: DatabaseDep, current: CurrentUserDep):
    result = db[PETS].delete_one({"_id": oid(pet_id)})
    return delete_result(result)


@router.patch("/adopt-pet/{pet_id}")
def set_adopted(
    pet_id: str,
    db: DatabaseDep,
    current: CurrentUserDep,
    update: Optional[AdoptStatus] = None,
):
    """
    Mark a pet adopted, or set the flag to the posted value.
    """
    adopted = update.adopted if update else True
    result = db[PETS].update_one({"_id": oid(pet_id)}, {"$set": {"adopted": adopted}})
    return update_result(result)
