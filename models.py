from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Collection names
USERS = "users"
PETS = "pets"
ADOPTION_REQUESTS = "adoptionRequests"
DONATION_CAMPAIGNS = "donationCampaigns"
DONATIONS = "donations"

ROLE_USER = "user"
ROLE_ADMIN = "admin"

STATUS_ACTIVE = "Active"
STATUS_PAUSED = "Paused"
# Older campaign documents were written with "Pause"
LEGACY_PAUSED = "Pause"

PET_PAGE_SIZE = 9
CAMPAIGN_PAGE_SIZE = 6
ACTIVE_SAMPLE_SIZE = 3


def now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_status(status: Optional[str]) -> Optional[str]:
    if not isinstance(status, str):
        return status
    folded = status.strip().lower()
    if folded in (STATUS_PAUSED.lower(), LEGACY_PAUSED.lower()):
        return STATUS_PAUSED
    if folded == STATUS_ACTIVE.lower():
        return STATUS_ACTIVE
    return status


def is_paused(campaign: Dict[str, Any]) -> bool:
    return normalize_status(campaign.get("status")) == STATUS_PAUSED


def new_user(email: str, profile: Dict[str, Any]) -> Dict[str, Any]:
    doc = dict(profile)
    doc["email"] = email
    doc["role"] = ROLE_USER
    return doc


def new_pet(fields: Dict[str, Any]) -> Dict[str, Any]:
    doc = dict(fields)
    doc["adopted"] = False
    doc["timestamp"] = now()
    return doc


def new_campaign(fields: Dict[str, Any]) -> Dict[str, Any]:
    doc = dict(fields)
    doc.setdefault("donatedAmount", 0)
    doc["status"] = STATUS_ACTIVE
    doc["timestamp"] = now()
    return doc


def new_donation(campaign_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "campaignId": campaign_id,
        "donationAmount": fields["donationAmount"],
        "donator": fields["donator"],
        "petName": fields.get("petName"),
        "petImage": fields.get("petImage"),
        "timestamp": now(),
    }
