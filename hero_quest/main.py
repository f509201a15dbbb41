from apscheduler.schedulers.asyncio import AsyncIOScheduler
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from hero_quest import clock
from hero_quest.crud import CreateData
from hero_quest.db import engine
from hero_quest.load_secrets import deployer_address
from hero_quest.routers import game
from hero_quest.routers import restapi
from hero_quest.services import game_db

scheduler = AsyncIOScheduler()
logging.basicConfig(level=logging.INFO)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


async def store_daily_snapshot() -> None:
    await game_db.store_leaderboard_snapshot(clock.now_ms())


@asynccontextmanager
async def lifespan(app):
    """Create tables and the admin set, then schedule leaderboard snapshots.
    This function is called to start the server.
    """
    await CreateData.create_table(engine)
    if deployer_address:
        await game_db.bootstrap_game(deployer_address)
    else:
        logging.warning("DEPLOYER_ADDRESS is not set; the admin set stays empty")

    scheduler.add_job(
        store_daily_snapshot,
        "interval",
        hours=24,
    )
    scheduler.start()
    try:
        yield
    finally:
        scheduler.shutdown()
        logging.info("Stop Server")


app = FastAPI(title="Hero Quest", lifespan=lifespan)
app.include_router(game.game_router)
app.include_router(restapi.rest_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
