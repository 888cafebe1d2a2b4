from fastapi import APIRouter

from db import DatabaseDep
from models import ADOPTION_REQUESTS, DONATION_CAMPAIGNS, DONATIONS, PETS
from .auth import CurrentUserDep

router = APIRouter(tags=["stats"])


@router.get("/overview-stats/{email}")
def overview_stats(email: str, db: DatabaseDep, current: CurrentUserDep):
    """
    Dashboard counts for one user plus the total they have donated.
    """
    pipeline = [
        {"$match": {"donator.email": email}},
        {"$group": {"_id": None, "total": {"$sum": "$donationAmount"}}},
    ]
    totals = list(db[DONATIONS].aggregate(pipeline))

    return {
        "totalPets": db[PETS].count_documents({"petOwner.email": email}),
        "myDonationCampaigns": db[DONATION_CAMPAIGNS].count_documents({"askerInfo.email": email}),
        "myAdoptionRequests": db[ADOPTION_REQUESTS].count_documents({"petOwnerInfo": email}),
        "totalDonations": totals[0]["total"] if totals else 0,
    }
