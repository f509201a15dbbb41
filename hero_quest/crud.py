"""Row-level helpers.

None of these commit: the service layer owns session/transaction boundaries
and calls them inside ``session.begin()``.
"""

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from typing import Dict, List
import logging

from hero_quest.models.schemas import (
    Base,
    GameAdmin,
    GameEvent,
    GameState,
    IdentityTable,
    LeaderboardSnapshot,
    PlayerAccount,
)

logger = logging.getLogger(__name__)


class CreateData:
    @staticmethod
    async def create_table(engine: AsyncEngine) -> None:
        """Create tables if not exists"""
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @staticmethod
    async def add_account(fields: dict, session: AsyncSession) -> PlayerAccount:
        account = PlayerAccount(**fields)
        session.add(account)
        await session.flush()
        return account

    @staticmethod
    async def add_registry_entry(address: str, session: AsyncSession) -> GameState:
        entry = GameState(address_id=address)
        session.add(entry)
        await session.flush()
        return entry

    @staticmethod
    async def add_admin(address: str, session: AsyncSession) -> None:
        session.add(GameAdmin(address=address))
        await session.flush()

    @staticmethod
    async def add_identity(
        address: str, hash_password: str, salt: str, session: AsyncSession
    ) -> None:
        session.add(IdentityTable(address=address, hash_password=hash_password, salt=salt))
        await session.flush()

    @staticmethod
    async def add_event(
        address: str,
        event_type: str,
        created_at: int,
        session: AsyncSession,
        *,
        round_number: int | None = None,
        amount: int | None = None,
        actor: str | None = None,
    ) -> GameEvent:
        event = GameEvent(
            address_id=address,
            event_type=event_type,
            round_number=round_number,
            amount=amount,
            actor=actor,
            created_at=created_at,
        )
        session.add(event)
        await session.flush()
        logger.info(
            f"event {event_type} address={address} round={round_number} amount={amount}"
        )
        return event

    @staticmethod
    async def add_snapshot(
        entries: List[dict], created_at: int, session: AsyncSession
    ) -> LeaderboardSnapshot:
        snapshot = LeaderboardSnapshot(entries=entries, created_at=created_at)
        session.add(snapshot)
        await session.flush()
        return snapshot


class ReadData:
    @staticmethod
    async def read_account(
        address: str, session: AsyncSession, for_update: bool = False
    ) -> PlayerAccount | None:
        """Read one account row

        Args:
            address (str): Account key
            for_update (bool): Lock the row until the transaction ends (ignored by SQLite)

        Returns:
            PlayerAccount | None: The row, or None if the address is not registered
        """
        stmt = select(PlayerAccount).where(PlayerAccount.address_id == address)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_admin_set(session: AsyncSession) -> set[str]:
        result = await session.execute(select(GameAdmin.address))
        return set(result.scalars().all())

    @staticmethod
    async def is_admin(address: str, session: AsyncSession) -> bool:
        stmt = select(GameAdmin.address).where(GameAdmin.address == address)
        result = await session.execute(stmt)
        return result.scalars().first() is not None

    @staticmethod
    async def read_registry(session: AsyncSession) -> List[str]:
        """Registered addresses in registration order"""
        stmt = select(GameState.address_id).order_by(GameState.sequence)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_accounts(
        addresses: List[str], session: AsyncSession
    ) -> Dict[str, PlayerAccount]:
        if not addresses:
            return {}
        stmt = select(PlayerAccount).where(PlayerAccount.address_id.in_(addresses))
        result = await session.execute(stmt)
        return {account.address_id: account for account in result.scalars().all()}

    @staticmethod
    async def read_identity(address: str, session: AsyncSession) -> IdentityTable | None:
        stmt = select(IdentityTable).where(IdentityTable.address == address)
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_events(address: str, session: AsyncSession) -> List[GameEvent]:
        stmt = (
            select(GameEvent)
            .where(GameEvent.address_id == address)
            .order_by(GameEvent.id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_latest_snapshot(session: AsyncSession) -> LeaderboardSnapshot | None:
        stmt = (
            select(LeaderboardSnapshot)
            .order_by(desc(LeaderboardSnapshot.created_at), desc(LeaderboardSnapshot.snapshot_id))
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalars().first()
