import asyncio
import structlog
from sqlalchemy import text
from app.core.config import settings
from app.db.session import engine, Base

logger = structlog.get_logger(__name__)


async def wait_for_db(retries=settings.DB_CONNECT_RETRIES, delay=settings.DB_CONNECT_DELAY):
    for i in range(retries):
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("database_connected")
            return
        except Exception as e:
            logger.warning("database_not_ready", attempt=i + 1, retries=retries, error=str(e))
            await asyncio.sleep(delay)

    raise RuntimeError("Database unreachable after retries")


async def create_tables():
    # registers every table on Base.metadata
    from app.models import group, group_member, expense, expense_split, settlement  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("tables_ready")
