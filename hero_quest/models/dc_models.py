from enum import Enum

from pydantic import BaseModel, Field


class EventTypeModel(str, Enum):
    player_registered = "PlayerRegistered"
    round_played = "RoundPlayed"
    round_certified = "RoundCertified"
    treasure_opened = "TreasureOpened"
    credit_claimed = "CreditClaimed"
    credit_granted = "CreditGranted"


class IdentityRequestModel(BaseModel):
    password: str = Field(min_length=1)


class RegisterModel(BaseModel):
    name: str = Field(min_length=1, max_length=64)


class CertifyModel(BaseModel):
    target: str
    points_earned: int = Field(ge=0)


class GrantCreditModel(BaseModel):
    target: str
