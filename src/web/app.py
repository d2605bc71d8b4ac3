from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.responses import JSONResponse

import db
from web.routes.groups import router as groups_router
from web.routes.users import router as users_router
from web.routes.workouts import router as workouts_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await db.init_db()
    logger.info("Database ready")
    yield
    await db.close_pool()


app = FastAPI(title="workout tracker web", version="0.1.0", lifespan=lifespan)


@app.get("/health")
async def health():
    return JSONResponse({"ok": True})


app.include_router(workouts_router)
app.include_router(users_router)
app.include_router(groups_router)

