"""
FastAPI app assembly: logging, middleware and router wiring.
"""
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from eventdesk.api.accounts import router as accounts_router
from eventdesk.api.audits import router as audits_router
from eventdesk.api.checkin import router as checkin_router
from eventdesk.api.dashboard import router as dashboard_router
from eventdesk.api.events import router as events_router
from eventdesk.api.registrations import router as registrations_router
from eventdesk.api.users import router as users_router
from eventdesk.utils.feature_flags import get_feature_flags
from eventdesk.utils.runtime import dev_mode_active
from eventdesk.utils.urls import get_app_base_url

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Event Check-in Service",
    description="API for event registration, QR code check-in and attendance statistics.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False


def _cors_origins() -> list:
    origins = {
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:8000",
        get_app_base_url(),
    }
    extra = os.getenv("CORS_ALLOWED_ORIGINS", "")
    origins.update(o.strip() for o in extra.split(",") if o.strip())
    return sorted(origins)


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(accounts_router)
app.include_router(users_router)
app.include_router(events_router)
app.include_router(registrations_router)
app.include_router(checkin_router)
app.include_router(dashboard_router)
app.include_router(audits_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "eventdesk"}


@app.get("/build-info")
def build_info():
    return {
        "service": "eventdesk",
        "version": app.version,
        "dev_mode": dev_mode_active(),
        "features": dict(get_feature_flags()),
    }
