"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from campus_buddy.config import settings
from campus_buddy.database import Base, engine
from campus_buddy.dependencies import AuthenticationRequired
from campus_buddy.services.outcomes import StoreUnavailable

# Import routers
from campus_buddy.routers import pages, users, events, notifications, buddy_requests, messages, catalog

# Import all models so Base.metadata knows about them
import campus_buddy.models  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Campus Buddy",
    description="Campus social service with profiles, events, buddy requests, messages and notifications",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(pages.router, tags=["Pages"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(buddy_requests.router, prefix="/api/buddy-requests", tags=["BuddyRequests"])
app.include_router(messages.router, prefix="/api/messages", tags=["Messages"])
app.include_router(catalog.router, prefix="/api")


@app.exception_handler(AuthenticationRequired)
async def authentication_required(request: Request, exc: AuthenticationRequired):
    """Pages bounce to the login form, API calls get a 401."""
    if exc.redirect:
        return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": "Authentication required", "reason": exc.reason.value},
    )


@app.exception_handler(StoreUnavailable)
async def store_unavailable(request: Request, exc: StoreUnavailable):
    logger.error("Request %s %s failed: store unavailable", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service temporarily unavailable"},
    )


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
