# taskflow/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configuration and DB
from taskflow.config import settings
from taskflow.core.db import init_db, close_db
from taskflow.core.handlers import register_exception_handlers

from taskflow.api.v1.routers import auth, profile, tasks

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Every failure leaves through the same envelope
register_exception_handlers(app)

@app.on_event("startup")
async def on_startup():
    await init_db()
    logger.info("[startup] %s running in %s mode", settings.APP_NAME, settings.env)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(profile.router, prefix="/api/v1")
app.include_router(tasks.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"success": True, "message": f"{settings.APP_NAME} is running"}
