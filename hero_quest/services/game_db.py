"""DB service layer for game use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries and per-account locking.
- Every mutation reads its account row FOR UPDATE inside ``session.begin()``,
  applies a domain rule, and records a GameEvent in the same transaction.
- Time arrives as an argument (milliseconds); routers read the clock.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError

from hero_quest.account_lock_manager import AccountLockManager
from hero_quest.converter import DataConverter
from hero_quest.crud import CreateData, ReadData
from hero_quest.db import Session
from hero_quest.domain import round_rules, treasure_rng
from hero_quest.domain.errors import AccountAlreadyExists, AccountNotFound
from hero_quest.domain.leaderboard import rank_by_points
from hero_quest.models.dc_models import EventTypeModel
from hero_quest.models.schema_models import (
    GameEventSchema,
    LeaderboardEntrySchema,
    LeaderboardSnapshotSchema,
    PlayerAccountSchema,
    PlayerCreditSchema,
    PlayerInfoSchema,
    TreasureSchema,
)

logger = logging.getLogger(__name__)
lock_manager = AccountLockManager()
data_converter = DataConverter()


async def _read_account_for_update(address: str, session):
    account = await ReadData.read_account(address, session, for_update=True)
    if account is None:
        raise AccountNotFound(f"no account registered for {address}")
    return account


async def _require_admin(caller: str, session) -> None:
    admin_set = await ReadData.read_admin_set(session)
    round_rules.require_admin(caller, admin_set)


def _check_invariants(account) -> None:
    """Abort the surrounding transaction if a rule left the account inconsistent."""
    violations = round_rules.invariant_violations(account)
    if violations:
        raise RuntimeError(
            f"Account {account.address_id} violates invariants: {', '.join(violations)}"
        )


# ==============================================================================
# ==== Access control ==========================================================
# ==============================================================================


async def bootstrap_game(deployer_address: str) -> None:
    """Seed the admin set with the deploying identity. Safe to call on every start."""
    async with Session() as session:
        async with session.begin():
            if await ReadData.is_admin(deployer_address, session):
                return
            await CreateData.add_admin(deployer_address, session)
    logger.info(f"Admin set bootstrapped with {deployer_address}")


async def is_authorized(address: str) -> bool:
    async with Session() as session:
        admin_set = await ReadData.read_admin_set(session)
    return round_rules.is_authorized(address, admin_set)


# ==============================================================================
# ==== Player operations =======================================================
# ==============================================================================


async def register(caller: str, name: str, now: int) -> PlayerAccountSchema:
    """Create the caller's account and append it to the registry.

    Raises:
        AccountAlreadyExists: the caller already has an account
    """
    async with lock_manager.registry():
        async with Session() as session:
            try:
                async with session.begin():
                    if await ReadData.read_account(caller, session) is not None:
                        raise AccountAlreadyExists(f"{caller} is already registered")
                    account = await CreateData.add_account(
                        round_rules.new_account_fields(caller, name, now), session
                    )
                    await CreateData.add_registry_entry(caller, session)
                    await CreateData.add_event(
                        caller, EventTypeModel.player_registered.value, now, session
                    )
                    result = PlayerAccountSchema.model_validate(account)
            except IntegrityError as e:
                raise AccountAlreadyExists(f"{caller} is already registered") from e
    logger.info(f"Registered {caller} as {name!r}")
    return result


async def play_round(caller: str, round_number: int, now: int) -> PlayerAccountSchema:
    async with lock_manager.account(caller):
        async with Session() as session:
            async with session.begin():
                account = await _read_account_for_update(caller, session)
                round_rules.play_round(account, round_number, now)
                _check_invariants(account)
                await CreateData.add_event(
                    caller,
                    EventTypeModel.round_played.value,
                    now,
                    session,
                    round_number=round_number,
                    amount=-1,
                )
                result = PlayerAccountSchema.model_validate(account)
    logger.info(f"{caller} played round {round_number}, credits left {result.credits}")
    return result


async def certify_round(
    caller: str, round_number: int, target: str, points_earned: int, now: int
) -> PlayerAccountSchema:
    """Admin confirms that ``target`` finished ``round_number`` and awards points.

    Raises:
        Unauthorized: caller is not in the admin set
        AccountNotFound: target is not registered
        RoundNotPlayed: target has not played the round
    """
    async with lock_manager.account(target):
        async with Session() as session:
            async with session.begin():
                await _require_admin(caller, session)
                account = await _read_account_for_update(target, session)
                round_rules.certify_round(account, round_number, points_earned, now)
                _check_invariants(account)
                await CreateData.add_event(
                    target,
                    EventTypeModel.round_certified.value,
                    now,
                    session,
                    round_number=round_number,
                    amount=points_earned,
                    actor=caller,
                )
                result = PlayerAccountSchema.model_validate(account)
    logger.info(
        f"{caller} certified round {round_number} for {target} (+{points_earned} points)"
    )
    return result


async def open_treasure(caller: str, round_number: int, now: int) -> TreasureSchema:
    async with lock_manager.account(caller):
        async with Session() as session:
            async with session.begin():
                account = await _read_account_for_update(caller, session)
                reward = treasure_rng.open_treasure(account, round_number, now)
                _check_invariants(account)
                await CreateData.add_event(
                    caller,
                    EventTypeModel.treasure_opened.value,
                    now,
                    session,
                    round_number=round_number,
                    amount=reward,
                )
                result = TreasureSchema(
                    address_id=caller,
                    round_number=round_number,
                    reward=reward,
                    gold=account.gold,
                )
    logger.info(f"{caller} opened round {round_number} treasure: {reward} gold")
    return result


async def claim_periodic_credit(caller: str, now: int) -> PlayerCreditSchema:
    async with lock_manager.account(caller):
        async with Session() as session:
            async with session.begin():
                account = await _read_account_for_update(caller, session)
                amount = round_rules.claim_periodic_credit(account, now)
                _check_invariants(account)
                await CreateData.add_event(
                    caller, EventTypeModel.credit_claimed.value, now, session, amount=amount
                )
                result = data_converter.convert_account_to_credit(account)
    logger.info(f"{caller} claimed {amount} credits")
    return result


async def admin_grant_credit(caller: str, target: str, now: int) -> PlayerCreditSchema:
    async with lock_manager.account(target):
        async with Session() as session:
            async with session.begin():
                await _require_admin(caller, session)
                account = await _read_account_for_update(target, session)
                amount = round_rules.grant_credit(account)
                _check_invariants(account)
                await CreateData.add_event(
                    target,
                    EventTypeModel.credit_granted.value,
                    now,
                    session,
                    amount=amount,
                    actor=caller,
                )
                result = data_converter.convert_account_to_credit(account)
    logger.info(f"{caller} granted {amount} credits to {target}")
    return result


# ==============================================================================
# ==== Read-only projections ===================================================
# ==============================================================================


async def read_account(address: str) -> PlayerAccountSchema:
    async with Session() as session:
        account = await ReadData.read_account(address, session)
        if account is None:
            raise AccountNotFound(f"no account registered for {address}")
        return PlayerAccountSchema.model_validate(account)


async def read_player_info(address: str) -> PlayerInfoSchema:
    async with Session() as session:
        account = await ReadData.read_account(address, session)
        if account is None:
            raise AccountNotFound(f"no account registered for {address}")
        return data_converter.convert_account_to_player_info(account)


async def read_player_credit(address: str) -> PlayerCreditSchema:
    async with Session() as session:
        account = await ReadData.read_account(address, session)
        if account is None:
            raise AccountNotFound(f"no account registered for {address}")
        return data_converter.convert_account_to_credit(account)


async def read_events(address: str) -> List[GameEventSchema]:
    async with Session() as session:
        if await ReadData.read_account(address, session) is None:
            raise AccountNotFound(f"no account registered for {address}")
        events = await ReadData.read_events(address, session)
        return [GameEventSchema.model_validate(event) for event in events]


async def read_leaderboard() -> List[LeaderboardEntrySchema]:
    """Rank all registered players from one read transaction."""
    async with Session() as session:
        async with session.begin():
            registry = await ReadData.read_registry(session)
            accounts = await ReadData.read_accounts(registry, session)
            ranking = rank_by_points(registry, accounts)
    return data_converter.convert_ranking_to_entries(ranking)


# ==============================================================================
# ==== Leaderboard snapshots ===================================================
# ==============================================================================


async def store_leaderboard_snapshot(now: int) -> LeaderboardSnapshotSchema:
    entries = await read_leaderboard()
    async with Session() as session:
        async with session.begin():
            snapshot = await CreateData.add_snapshot(
                [entry.model_dump() for entry in entries], now, session
            )
            result = data_converter.convert_snapshot(snapshot)
    logger.info(f"Stored leaderboard snapshot with {len(entries)} entries")
    return result


async def read_latest_snapshot() -> LeaderboardSnapshotSchema | None:
    async with Session() as session:
        snapshot = await ReadData.read_latest_snapshot(session)
        if snapshot is None:
            return None
        return data_converter.convert_snapshot(snapshot)
