from typing import Optional

from fastapi import APIRouter, Query
from pymongo import DESCENDING

from db import (
    DatabaseDep,
    delete_result,
    insert_result,
    oid,
    serialize,
    serialize_all,
    update_result,
)
from models import (
    ACTIVE_SAMPLE_SIZE,
    CAMPAIGN_PAGE_SIZE,
    DONATION_CAMPAIGNS,
    STATUS_ACTIVE,
    new_campaign,
    normalize_status,
)
from schemas import (
    CampaignCreate,
    CampaignStatusUpdate,
    CampaignUpdate,
    DonatedAmountUpdate,
    dump,
)
from .auth import AdminDep, CurrentUserDep

router = APIRouter(tags=["donation-campaigns"])


@router.get("/donation-campaigns")
def list_campaigns(
    db: DatabaseDep,
    page: Optional[int] = Query(default=None, ge=0),
):
    """
    Campaigns newest first, optionally one page at a time.
    """
    cursor = db[DONATION_CAMPAIGNS].find().sort("timestamp", DESCENDING)
    if page is not None:
        cursor = cursor.skip(page * CAMPAIGN_PAGE_SIZE).limit(CAMPAIGN_PAGE_SIZE)
    return serialize_all(cursor)


@router.get("/all-donation-campaigns")
def list_all_campaigns(db: DatabaseDep, admin: AdminDep):
    return serialize_all(db[DONATION_CAMPAIGNS].find().sort("timestamp", DESCENDING))


@router.get("/active-donations")
def sample_active_campaigns(db: DatabaseDep):
    cursor = db[DONATION_CAMPAIGNS].find({"status": STATUS_ACTIVE}).limit(ACTIVE_SAMPLE_SIZE)
    return serialize_all(cursor)


@router.get("/donation-campaign/{campaign_id}")
def get_campaign(campaign_id: str, db: DatabaseDep):
    return serialize(db[DONATION_CAMPAIGNS].find_one({"_id": oid(campaign_id)}))


@router.get("/my-donation-campaigns/{email}")
def list_my_campaigns(email: str, db: DatabaseDep, current: CurrentUserDep):
    return serialize_all(db[DONATION_CAMPAIGNS].find({"askerInfo.email": email}))


@router.post("/donation-campaigns")
def create_campaign(campaign_in: CampaignCreate, db: DatabaseDep, current: CurrentUserDep):
    result = db[DONATION_CAMPAIGNS].insert_one(new_campaign(dump(campaign_in)))
    return insert_result(result)


@router.put("/update-donation-campaign/{campaign_id}")
def update_campaign(
    campaign_id: str,
    campaign_in: CampaignUpdate,
    db: DatabaseDep,
    current: CurrentUserDep,
):
    result = db[DONATION_CAMPAIGNS].update_one(
        {"_id": oid(campaign_id)}, {"$set": dump(campaign_in)}
    )
    return update_result(result)


@router.patch("/donation-status/{campaign_id}")
def change_campaign_status(
    campaign_id: str,
    update: CampaignStatusUpdate,
    db: DatabaseDep,
    current: CurrentUserDep,
):
    result = db[DONATION_CAMPAIGNS].update_one(
        {"_id": oid(campaign_id)},
        {"$set": {"status": normalize_status(update.status)}},
    )
    return update_result(result)


@router.patch("/donation-campaign/donatedAmount/{campaign_id}")
def adjust_donated_amount(
    campaign_id: str,
    update: DonatedAmountUpdate,
    db: DatabaseDep,
    current: CurrentUserDep,
):
    """
    Move the campaign's running total. Callers send this alongside
    recording or refunding a donation; nothing else keeps it in step.
    """
    amount = update.donationAmount
    if update.status == "decrease":
        amount = -amount

    result = db[DONATION_CAMPAIGNS].update_one(
        {"_id": oid(campaign_id)}, {"$inc": {"donatedAmount": amount}}
    )
    return update_result(result)


@router.delete("/donations/{campaign_id}")
def delete_campaign(campaign_id: str, db: DatabaseDep, admin: AdminDep):
    result = db[DONATION_CAMPAIGNS].delete_one({"_id": oid(campaign_id)})
    return delete_result(result)
