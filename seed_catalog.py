"""
seed_catalog.py
───────────────
Creates the tables (if missing) and inserts the default teachers + sessions.
Safe to re-run: nothing is inserted once teachers exist.

    python seed_catalog.py

Reads DATABASE_URL / AUDIO_BASE_URL from .env.
"""
import asyncio
import logging

from dotenv import load_dotenv

load_dotenv()


async def seed():
    from app.core.config import settings
    from app.core.database import AsyncSessionLocal, engine, init_models
    from app.core.logging_setup import configure_logging
    from app.services.catalog_seed import seed_catalog
    from app.services.storage import DatabaseStorage

    configure_logging(settings.LOG_LEVEL)
    log = logging.getLogger("seed_catalog")

    await init_models()
    async with AsyncSessionLocal() as db:
        inserted = await seed_catalog(DatabaseStorage(db), audio_base_url=settings.AUDIO_BASE_URL)

    if inserted:
        log.info("Default catalog inserted")
    else:
        log.info("Teachers already exist; no changes made")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
