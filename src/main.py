"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from src.api import users
from src.config import PACKAGE_DIR, get_settings
from src.exceptions import UserStoreError

logger = logging.getLogger(__name__)
settings = get_settings()

ROUTE_TABLE = [
    ("GET", "/users", "Get all users"),
    ("GET", "/users?id=X", "Get user by ID"),
    ("POST", "/users", "Create new user"),
    ("PUT", "/users/:id", "Update user"),
    ("DELETE", "/users/:id", "Delete user"),
]


def log_startup_banner() -> None:
    """Log the listening address, the route table and the environment check."""
    logger.info(f"Server is running on http://localhost:{settings.port}")
    logger.info("Available endpoints:")
    for method, path, description in ROUTE_TABLE:
        logger.info(f"  {method:<6} {path:<12} - {description}")
    logger.info("Process environment variables test:")
    logger.info(f"  MONGO_URI: {settings.mongo_uri}")


@lru_cache
def get_home_page() -> str:
    """Load the API description page (cached after first read)."""
    return (PACKAGE_DIR / "static" / "index.html").read_text(encoding="utf-8")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    log_startup_banner()
    yield


app = FastAPI(
    title="User Store API",
    description="CRUD operations over a flat-file collection of users",
    version="0.1.0",
    lifespan=lifespan,
)

# Every origin is allowed on every route
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UserStoreError)
async def user_store_error_handler(request: Request, exc: UserStoreError) -> JSONResponse:
    """Render domain errors as ``{"error": message}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and elapsed time for every request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f} ms)")
    return response


# Register routers
app.include_router(users.router)


@app.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home():
    """Static page describing the API."""
    return HTMLResponse(get_home_page())


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
