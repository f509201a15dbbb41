import os
import tempfile

# Point the app at a throwaway SQLite file before any hero_quest module is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="hero_quest_test_")
os.environ["DB_BACKEND"] = "sqlite"
os.environ["SQLITE_PATH"] = os.path.join(_TMP_DIR, "test.sqlite3")
os.environ["PEPPER_DATA"] = "test-pepper"

from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402

from hero_quest.db import engine  # noqa: E402
from hero_quest.domain.round_rules import new_account_fields  # noqa: E402
from hero_quest.models.schemas import Base  # noqa: E402
from hero_quest.services import game_db  # noqa: E402

ADMIN = "0x" + "ad" * 32
NOW = 1_700_000_000_000


def make_address(index: int) -> str:
    return "0x" + f"{index:064x}"


@pytest.fixture
def account():
    """A freshly registered account as a plain object, for the pure rules."""
    return SimpleNamespace(**new_account_fields(make_address(1), "alice", NOW))


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine


@pytest.fixture
async def game(database):
    """Database with the admin set bootstrapped."""
    await game_db.bootstrap_game(ADMIN)
    yield database
