"""FastAPI application."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from backend.api.limiter import limiter
from backend.config import settings
from backend.db.base import init_db

logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).parent.parent.parent / "frontend" / "dist"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and initialize database on startup."""
    logging.basicConfig(level=settings.log_level)
    try:
        init_db()
    except ValueError as e:
        logger.warning(f"Skipping database init: {e}")
    yield


app = FastAPI(
    title="Profile Directory API",
    description="Browse, search and discuss candidate profiles",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Mentor-ID"],
)


# Import and include routers
from backend.api.routes import auth, comments, mentors, profiles, touch_points  # noqa: E402

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(mentors.router, prefix="/mentors", tags=["Mentors"])
app.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])
app.include_router(comments.router, prefix="/profiles", tags=["Comments"])
app.include_router(touch_points.router, tags=["Touch points"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Uploaded profile images
media_dir = Path(settings.media_dir)
media_dir.mkdir(parents=True, exist_ok=True)
app.mount(settings.media_url, StaticFiles(directory=media_dir), name="media")


def resolve_frontend_file(frontend_dir: Path, full_path: str) -> Path:
    """Built file for a SPA path; anything outside the build falls back to index.html."""
    root = frontend_dir.resolve()
    file_path = (root / full_path).resolve()
    if file_path.is_relative_to(root) and file_path.is_file():
        return file_path
    return root / "index.html"


def mount_frontend(app: FastAPI, frontend_dir: Path):
    """Serve a built frontend and its client-side routes."""
    if (frontend_dir / "assets").exists():
        app.mount("/assets", StaticFiles(directory=frontend_dir / "assets"), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str):
        """Serve the SPA for all non-API routes."""
        return FileResponse(resolve_frontend_file(frontend_dir, full_path))


# Serve static files from frontend build
if FRONTEND_DIR.exists():
    mount_frontend(app, FRONTEND_DIR)
