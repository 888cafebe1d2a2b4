from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class TokenRequest(BaseModel):
    email: EmailStr

    model_config = ConfigDict(extra="allow")


class UserProfile(BaseModel):
    name: Optional[str] = None
    photo: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class Owner(BaseModel):
    email: EmailStr

    model_config = ConfigDict(extra="allow")


class PetCreate(BaseModel):
    name: str
    category: str
    age: Union[int, float, str]
    location: str
    photo: str
    descriptions: Optional[Any] = None
    petOwner: Owner

    model_config = ConfigDict(extra="allow")


class PetUpdate(BaseModel):
    photo: str
    name: str
    age: Union[int, float, str]
    category: str
    location: str
    descriptions: Optional[Any] = None


class AdoptStatus(BaseModel):
    adopted: bool = True


class AdoptionRequestCreate(BaseModel):
    petOwnerInfo: EmailStr

    model_config = ConfigDict(extra="allow")


class CampaignCreate(BaseModel):
    petName: str
    petImage: str
    maxAmount: float = Field(gt=0, allow_inf_nan=False)
    lastDate: str
    descriptions: Optional[Any] = None
    askerInfo: Owner

    model_config = ConfigDict(extra="allow")


class CampaignUpdate(BaseModel):
    petName: str
    petImage: str
    maxAmount: float = Field(gt=0, allow_inf_nan=False)
    lastDate: str
    descriptions: Optional[Any] = None


class CampaignStatusUpdate(BaseModel):
    status: str


class DonationCreate(BaseModel):
    campaignId: str
    donationAmount: float = Field(gt=0, allow_inf_nan=False)
    donator: Owner
    petName: Optional[str] = None
    petImage: Optional[str] = None


class DonatedAmountUpdate(BaseModel):
    donationAmount: float = Field(allow_inf_nan=False)
    status: Optional[str] = None


class PaymentIntentRequest(BaseModel):
    donationAmount: Optional[float] = None


def dump(model: BaseModel) -> Dict[str, Any]:
    """Plain dict for storage, nested owner models included."""
    return model.model_dump(mode="json")
