from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import JSON, BigInteger, Boolean, Integer, String, Uuid
from uuid6 import uuid7


class Base(DeclarativeBase):
    pass


class PlayerAccount(Base):
    __tablename__ = "player_account"
    address_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    heroes_owned = Column(Integer, default=0, nullable=False)
    credits = Column(Integer, default=0, nullable=False)
    gold = Column(Integer, default=0, nullable=False)
    point = Column(Integer, default=0, nullable=False)

    played_1 = Column(Boolean, default=False, nullable=False)
    played_2 = Column(Boolean, default=False, nullable=False)
    played_3 = Column(Boolean, default=False, nullable=False)
    certified_1 = Column(Boolean, default=False, nullable=False)
    certified_2 = Column(Boolean, default=False, nullable=False)
    certified_3 = Column(Boolean, default=False, nullable=False)
    # timestamps are milliseconds since the epoch, 0 = not yet
    play_time_1 = Column(BigInteger, default=0, nullable=False)
    play_time_2 = Column(BigInteger, default=0, nullable=False)
    play_time_3 = Column(BigInteger, default=0, nullable=False)
    finish_time_1 = Column(BigInteger, default=0, nullable=False)
    finish_time_2 = Column(BigInteger, default=0, nullable=False)
    finish_time_3 = Column(BigInteger, default=0, nullable=False)
    treasure_opened_1 = Column(Boolean, default=False, nullable=False)
    treasure_opened_2 = Column(Boolean, default=False, nullable=False)

    current_round = Column(Integer, default=0, nullable=False)
    game_finished = Column(Boolean, default=False, nullable=False)
    last_claim_time = Column(BigInteger, default=0, nullable=False)
    created_at = Column(BigInteger, default=0, nullable=False)


class GameAdmin(Base):
    __tablename__ = "game_admin"
    address = Column(String, primary_key=True, index=True)


class GameState(Base):
    """Append-only registry of player addresses."""

    __tablename__ = "game_state"
    sequence = Column(Integer, primary_key=True, autoincrement=True)
    address_id = Column(String, unique=True, nullable=False)


class IdentityTable(Base):
    __tablename__ = "identities"
    address = Column(String, primary_key=True, index=True)
    hash_password = Column(String)
    salt = Column(String)


class GameEvent(Base):
    __tablename__ = "game_event"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    event_id = Column(Uuid, unique=True, default=uuid7)
    address_id = Column(String, index=True, nullable=False)
    event_type = Column(String, nullable=False)
    round_number = Column(Integer, nullable=True)
    amount = Column(Integer, nullable=True)
    actor = Column(String, nullable=True)
    created_at = Column(BigInteger, nullable=False)


class LeaderboardSnapshot(Base):
    __tablename__ = "leaderboard_snapshot"
    snapshot_id = Column(Uuid, primary_key=True, default=uuid7)
    created_at = Column(BigInteger, nullable=False, index=True)
    entries = Column(JSON, nullable=False)
