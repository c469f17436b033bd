import logging

from fastapi import FastAPI

from creditledger.db import init_db, sql_mode_enabled

from creditledger.api.routes.health import router as health_router
from creditledger.api.routes.credits import router as credits_router
from creditledger.api.routes.clients import router as clients_router


logger = logging.getLogger(__name__)

app = FastAPI(title="Credit Ledger API", version="0.1.0")

@app.on_event("startup")
def _startup() -> None:
    if sql_mode_enabled():
        # Fail fast if DB unreachable + ensure tables exist
        init_db()
        logger.info("SQL mode: credits stored in database")
    else:
        logger.info("JSON mode: credits stored in data dir")

app.include_router(health_router)
app.include_router(credits_router)
app.include_router(clients_router)
