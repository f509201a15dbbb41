from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID


class PlayerAccountSchema(BaseModel):
    address_id: str
    name: str
    heroes_owned: int
    credits: int
    gold: int
    point: int
    played_1: bool
    played_2: bool
    played_3: bool
    certified_1: bool
    certified_2: bool
    certified_3: bool
    play_time_1: int
    play_time_2: int
    play_time_3: int
    finish_time_1: int
    finish_time_2: int
    finish_time_3: int
    treasure_opened_1: bool
    treasure_opened_2: bool
    current_round: int
    game_finished: bool
    last_claim_time: int
    created_at: int

    class Config:
        from_attributes = True


class PlayerInfoSchema(BaseModel):
    """Public projection of an account. Credits are deliberately absent."""
    address_id: str
    name: str
    heroes_owned: int
    gold: int
    point: int
    played_1: bool
    played_2: bool
    played_3: bool
    certified_1: bool
    certified_2: bool
    certified_3: bool
    play_time_1: int
    play_time_2: int
    play_time_3: int
    finish_time_1: int
    finish_time_2: int
    finish_time_3: int
    treasure_opened_1: bool
    treasure_opened_2: bool
    current_round: int
    game_finished: bool
    last_claim_time: int
    progress_state: str


class PlayerCreditSchema(BaseModel):
    address_id: str
    credits: int


class TreasureSchema(BaseModel):
    address_id: str
    round_number: int
    reward: int
    gold: int


class AuthorizationSchema(BaseModel):
    address: str
    authorized: bool


class IdentitySchema(BaseModel):
    address: str


class LeaderboardEntrySchema(BaseModel):
    rank: int
    name: str
    address: str
    points: int


class LeaderboardSnapshotSchema(BaseModel):
    snapshot_id: UUID
    created_at: int
    entries: List[LeaderboardEntrySchema]

    class Config:
        from_attributes = True


class GameEventSchema(BaseModel):
    event_id: UUID
    address_id: str
    event_type: str
    round_number: Optional[int] = None
    amount: Optional[int] = None
    actor: Optional[str] = None
    created_at: int

    class Config:
        from_attributes = True
