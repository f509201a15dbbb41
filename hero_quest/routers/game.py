import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status

from hero_quest import clock
from hero_quest.authentication.basic_authentication import BasicAuthentication
from hero_quest.domain import errors
from hero_quest.models.dc_models import (
    CertifyModel,
    GrantCreditModel,
    IdentityRequestModel,
    RegisterModel,
)
from hero_quest.models.schema_models import (
    IdentitySchema,
    PlayerAccountSchema,
    PlayerCreditSchema,
    TreasureSchema,
)
from hero_quest.services import game_db

game_router = APIRouter()
basic_auth = BasicAuthentication()

ERROR_STATUS = {
    errors.Unauthorized: status.HTTP_403_FORBIDDEN,
    errors.AccountNotFound: status.HTTP_404_NOT_FOUND,
    errors.AccountAlreadyExists: status.HTTP_409_CONFLICT,
    errors.RoundAlreadyPlayed: status.HTTP_409_CONFLICT,
    errors.PreviousRoundNotCertified: status.HTTP_409_CONFLICT,
    errors.RoundNotPlayed: status.HTTP_409_CONFLICT,
    errors.InsufficientCredits: status.HTTP_409_CONFLICT,
    errors.TreasureAlreadyOpened: status.HTTP_409_CONFLICT,
    errors.TooEarlyToClaim: status.HTTP_429_TOO_MANY_REQUESTS,
    errors.InvalidRound: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def to_http_exception(error: errors.GameError) -> HTTPException:
    """Translate a rejected game operation into the HTTP error sent to the client"""
    logging.warning(f"Rejected: {error.code}: {error.detail}")
    return HTTPException(
        status_code=ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST),
        detail={"error": error.code, "message": error.detail},
    )


class IdentityAPI:
    @staticmethod
    @game_router.post(
        "/identities",
        response_model=IdentitySchema,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_identity(request: IdentityRequestModel):
        """Create a new caller identity. Authenticate later with the returned address as username."""
        address = await basic_auth.store_identity(request.password)
        return IdentitySchema(address=address)


class PlayerAPI:
    @staticmethod
    @game_router.post(
        "/players",
        response_model=PlayerAccountSchema,
        status_code=status.HTTP_201_CREATED,
    )
    async def register(
        request: RegisterModel,
        caller: str = Depends(basic_auth.check_identity),
    ):
        try:
            return await game_db.register(caller, request.name, clock.now_ms())
        except errors.GameError as e:
            raise to_http_exception(e)


class RoundAPI:
    @staticmethod
    @game_router.post("/rounds/{round_number}/play", response_model=PlayerAccountSchema)
    async def play_round(
        round_number: int = Path(),
        caller: str = Depends(basic_auth.check_identity),
    ):
        """Spend one credit to play a round. Rounds 2 and 3 need the previous round certified."""
        try:
            return await game_db.play_round(caller, round_number, clock.now_ms())
        except errors.GameError as e:
            raise to_http_exception(e)

    @staticmethod
    @game_router.post("/rounds/{round_number}/certify", response_model=PlayerAccountSchema)
    async def certify_round(
        request: CertifyModel,
        round_number: int = Path(),
        caller: str = Depends(basic_auth.check_identity),
    ):
        """Admin only. Certify a played round for the target and award points."""
        try:
            return await game_db.certify_round(
                caller, round_number, request.target, request.points_earned, clock.now_ms()
            )
        except errors.GameError as e:
            raise to_http_exception(e)

    @staticmethod
    @game_router.post("/rounds/{round_number}/treasure", response_model=TreasureSchema)
    async def open_treasure(
        round_number: int = Path(),
        caller: str = Depends(basic_auth.check_identity),
    ):
        try:
            return await game_db.open_treasure(caller, round_number, clock.now_ms())
        except errors.GameError as e:
            raise to_http_exception(e)


class CreditAPI:
    @staticmethod
    @game_router.post("/credits/claim", response_model=PlayerCreditSchema)
    async def claim_periodic_credit(caller: str = Depends(basic_auth.check_identity)):
        try:
            return await game_db.claim_periodic_credit(caller, clock.now_ms())
        except errors.GameError as e:
            raise to_http_exception(e)

    @staticmethod
    @game_router.post("/credits/grant", response_model=PlayerCreditSchema)
    async def admin_grant_credit(
        request: GrantCreditModel,
        caller: str = Depends(basic_auth.check_identity),
    ):
        """Admin only. Bonus credits for the target, no cooldown."""
        try:
            return await game_db.admin_grant_credit(caller, request.target, clock.now_ms())
        except errors.GameError as e:
            raise to_http_exception(e)
