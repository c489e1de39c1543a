# expohub/main.py
import datetime as dt
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from expohub.config import settings
from expohub.core.bootstrap import ensure_default_admin
from expohub.core.db import close_db, init_db
from expohub.core.errors import register_exception_handlers

from expohub.api.routers import activity, admin, auth, exhibitors, expos, registrations, users
from expohub.api.routers.ws_events import router as ws_events_router

logger = logging.getLogger("uvicorn.error")
logger.setLevel(settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database (optionally creating tables), seed the admin, close on shutdown."""
    logger.info("[startup] %s %s (env=%s)", settings.APP_NAME, settings.VERSION, settings.env)
    await init_db(generate_schemas=settings.db_generate_schemas)
    # Ensure there's a default admin account on first run
    await ensure_default_admin()

    yield

    await close_db()
    logger.info("[shutdown] database connections closed")


app = FastAPI(title=settings.APP_NAME, version=settings.VERSION, lifespan=lifespan)

# CORS for the SPA
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """One access-log line per request: method, path, status and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %d %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


register_exception_handlers(app)

# REST
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(expos.router, prefix="/api")
app.include_router(expos.schedules_router, prefix="/api")
app.include_router(registrations.router, prefix="/api")
app.include_router(exhibitors.router, prefix="/api")
app.include_router(exhibitors.booths_router, prefix="/api")
app.include_router(activity.interactions_router, prefix="/api")
app.include_router(activity.notifications_router, prefix="/api")
app.include_router(activity.feedback_router, prefix="/api")
app.include_router(admin.router, prefix="/api")

# WebSocket
app.include_router(ws_events_router)


@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z"),
        "version": settings.VERSION,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("expohub.main:app", host=settings.host, port=settings.port)
