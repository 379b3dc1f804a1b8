# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Baakh API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 5001
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    BaakhException,
    baakh_exception_handler,
    supabase_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    admin,
    categories,
    couplets,
    health,
    poetry,
    poets,
    search,
    tags,
    tasks,
    timeline,
)
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup and shutdown."""
    logger.info(f"Starting Baakh API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    yield
    logger.info("Shutting down Baakh API")


# Create FastAPI application
app = FastAPI(
    title="Baakh API",
    description="""
## Sindhi Poetry Archive API

Bilingual (Sindhi / English) access to poets, poetry, couplets, categories,
tags and the literary timeline, plus admin tools for Sindhi text.

### Conventions

- `?lang=sd|en` selects the language of names and titles (default `en`).
- Listings take `page`, `limit`, `search`, `sortBy`, `sortOrder` and return
  `{success, <items>, total, page, limit, totalPages}`.
- `countOnly=true` returns `{success, total}` only.
- Deleted rows are hidden everywhere.
- Write endpoints need a Supabase bearer token of an admin or editor.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Poets", "description": "Poet profiles"},
        {"name": "Couplets", "description": "Couplets (shers) and their counters"},
        {"name": "Poetry", "description": "Poems with translations"},
        {"name": "Categories", "description": "Poetic forms"},
        {"name": "Tags", "description": "Topic and poet tags"},
        {"name": "Timeline", "description": "Literary periods and events"},
        {"name": "Search", "description": "Site-wide quick search"},
        {"name": "Admin", "description": "Hesudhar, romanizer, dictionaries and stats"},
        {"name": "Tasks", "description": "Track background task progress"},
        {"name": "Auth", "description": "Token verification and current user"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(BaakhException, baakh_exception_handler)
app.add_exception_handler(SupabaseClientError, supabase_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(health.router, tags=["Health"])
app.include_router(auth_routes.router, prefix="/api", tags=["Auth"])
app.include_router(poets.router, prefix="/api/poets", tags=["Poets"])
app.include_router(couplets.router, prefix="/api/couplets", tags=["Couplets"])
app.include_router(poetry.router, prefix="/api/poetry", tags=["Poetry"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(tags.router, prefix="/api/tags", tags=["Tags"])
app.include_router(timeline.router, prefix="/api/timeline", tags=["Timeline"])
app.include_router(search.router, prefix="/api/search", tags=["Search"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(tasks.router, prefix="/api/admin/tasks", tags=["Tasks"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "Baakh API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }
