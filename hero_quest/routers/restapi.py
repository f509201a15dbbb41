from typing import List

from fastapi import APIRouter, HTTPException, status

from hero_quest.domain import errors
from hero_quest.models.schema_models import (
    AuthorizationSchema,
    GameEventSchema,
    LeaderboardEntrySchema,
    LeaderboardSnapshotSchema,
    PlayerCreditSchema,
    PlayerInfoSchema,
)
from hero_quest.routers.game import to_http_exception
from hero_quest.services import game_db

rest_router = APIRouter()


class PlayerInfoAPI:
    @staticmethod
    @rest_router.get("/players/{address}", response_model=PlayerInfoSchema)
    async def get_player_info(address: str):
        try:
            return await game_db.read_player_info(address)
        except errors.GameError as e:
            raise to_http_exception(e)

    @staticmethod
    @rest_router.get("/players/{address}/credit", response_model=PlayerCreditSchema)
    async def get_player_credit(address: str):
        try:
            return await game_db.read_player_credit(address)
        except errors.GameError as e:
            raise to_http_exception(e)

    @staticmethod
    @rest_router.get("/players/{address}/events", response_model=List[GameEventSchema])
    async def get_player_events(address: str):
        try:
            return await game_db.read_events(address)
        except errors.GameError as e:
            raise to_http_exception(e)


class AdminAPI:
    @staticmethod
    @rest_router.get("/admins/{address}", response_model=AuthorizationSchema)
    async def is_authorized(address: str):
        authorized = await game_db.is_authorized(address)
        return AuthorizationSchema(address=address, authorized=authorized)


class LeaderboardAPI:
    @staticmethod
    @rest_router.get("/leaderboard", response_model=List[LeaderboardEntrySchema])
    async def get_leaderboard():
        return await game_db.read_leaderboard()

    @staticmethod
    @rest_router.get("/leaderboard/snapshot", response_model=LeaderboardSnapshotSchema)
    async def get_latest_snapshot():
        snapshot = await game_db.read_latest_snapshot()
        if snapshot is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No leaderboard snapshot has been stored yet.",
            )
        return snapshot
