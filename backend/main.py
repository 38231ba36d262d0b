"""Bros Unblocked search FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

# Configure logging so our INFO messages appear in container logs
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Keep noisy libraries at WARNING
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
from fastapi.middleware.cors import CORSMiddleware

from backend.config import settings
from backend.routers import games, search
from backend.services.content_service import get_content, load_content

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    # Startup: a failed load is not fatal, routes retry and report it
    result = await load_content()
    if not result.ok:
        logger.warning(
            "Content index unavailable at startup (%s). "
            "Search will report errors until it loads.",
            result.error,
        )
    yield


app = FastAPI(
    title="Bros Unblocked Search",
    description="Search and browse for the Bros Unblocked games site",
    version=VERSION,
    lifespan=lifespan,
)

# CORS — localhost defaults plus any extra origins from BROS_CORS_ORIGINS
_cors_origins = ["http://localhost:8081", "http://localhost:8080"]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routers
app.include_router(search.router)
app.include_router(games.router)


# Health check
@app.get("/api/health")
async def health():
    return {"status": "ok", "version": VERSION, "content_loaded": get_content() is not None}
