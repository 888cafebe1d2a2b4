import logging

from fastapi import APIRouter, HTTPException

from db import DatabaseDep, delete_result, insert_result, oid, serialize_all
from models import DONATION_CAMPAIGNS, DONATIONS, is_paused, new_donation
from schemas import DonationCreate, dump
from .auth import CurrentUserDep

logger = logging.getLogger(__name__)

router = APIRouter(tags=["donations"])


@router.post("/donations")
def create_donation(donation_in: DonationCreate, db: DatabaseDep, current: CurrentUserDep):
    """
    Record a donation against a campaign that is still accepting them.
    The campaign's donatedAmount is left for the caller to adjust.
    """
    campaign = db[DONATION_CAMPAIGNS].find_one({"_id": oid(donation_in.campaignId)})
    if campaign is None:
        raise HTTPException(status_code=404, detail="Campaign not found")

    if is_paused(campaign):
        logger.info("Donation refused, campaign %s is paused", donation_in.campaignId)
        raise HTTPException(status_code=400, detail="This campaign is paused")

    doc = new_donation(str(campaign["_id"]), dump(donation_in))
    result = db[DONATIONS].insert_one(doc)
    return insert_result(result)


@router.get("/donator-list/{campaign_id}")
def list_campaign_donations(campaign_id: str, db: DatabaseDep, current: CurrentUserDep):
    return serialize_all(db[DONATIONS].find({"campaignId": campaign_id}))


@router.get("/my-donations/{email}")
def list_my_donations(email: str, db: DatabaseDep, current: CurrentUserDep):
    return serialize_all(db[DONATIONS].find({"donator.email": email}))


@router.delete("/refund-donation/{donation_id}")
def refund_donation(donation_id: str, db: DatabaseDep, current: CurrentUserDep):
    # donatedAmount on the campaign is not reversed here
    result = db[DONATIONS].delete_one({"_id": oid(donation_id)})
    return delete_result(result)
