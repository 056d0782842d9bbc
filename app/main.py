from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.db_check import create_tables, wait_for_db
from app.core.errors import LedgerError
from app.core.logging import configure_logging
from app.api.v1.routes.system import router as system_router
from app.api.v1.routes.group import router as group_router
from app.api.v1.routes.expense import router as expense_router
from app.api.v1.routes.settlement import router as settlement_router

configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await wait_for_db()
    if settings.CREATE_TABLES:
        await create_tables()
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    logger.error(
        "ledger_error",
        error_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
        group_id=request.path_params.get("group_id"),
    )
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__},
    )


@app.get("/")
async def root():
    return {"message": "SplitLedger Backend is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(expense_router, prefix="/api/v1")
app.include_router(settlement_router, prefix="/api/v1")
