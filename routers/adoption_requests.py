from fastapi import APIRouter

from db import DatabaseDep, delete_result, insert_result, oid, serialize_all
from models import ADOPTION_REQUESTS
from schemas import AdoptionRequestCreate, dump
from .auth import CurrentUserDep

router = APIRouter(tags=["adoption-requests"])


@router.post("/adoption-requests")
def create_adoption_request(
    request_in: AdoptionRequestCreate,
    db: DatabaseDep,
    current: CurrentUserDep,
):
    result = db[ADOPTION_REQUESTS].insert_one(dump(request_in))
    return insert_result(result)


@router.get("/adoption-request/{email}")
def list_owner_requests(email: str, db: DatabaseDep, current: CurrentUserDep):
    """
    Requests addressed to the owner with this email.
    """
    return serialize_all(db[ADOPTION_REQUESTS].find({"petOwnerInfo": email}))


@router.delete("/delete-adoption-request/{request_id}")
def delete_adoption_request(request_id: str, db: DatabaseDep, current: CurrentUserDep):
    result = db[ADOPTION_REQUESTS].delete_one({"_id": oid(request_id)})
    return delete_result(result)
