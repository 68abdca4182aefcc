"""FastAPI application entry point."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api.config import Settings, settings as default_settings
from catalog_api.data.sample_catalog import ensure_sample_catalog
from catalog_api.models.database import Database
from catalog_api.api import attributes, categories, products

API_NAME = "Product Catalog API"
API_VERSION = "1.0.0"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "Cross-Origin-Opener-Policy": "same-origin",
}

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    database: Database = app.state.database
    database.create_tables()

    if app.state.settings.seed_on_startup:
        db = database.session()
        try:
            ensure_sample_catalog(db)
        finally:
            db.close()

    yield

    # Shutdown
    database.dispose()


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application around its settings and database."""
    settings = settings or default_settings

    # Configure logging
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=API_NAME,
        description="Category tree, attribute resolution and product listing for a product catalog",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)
    app.state.started_at = time.monotonic()

    def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        content = {"error": "Internal server error"}
        if settings.debug:
            content["message"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    # Middleware registered first runs innermost. CORS must stay last so
    # error responses still carry its headers.
    @app.middleware("http")
    async def catch_exceptions(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return internal_error_response(request, exc)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} {duration_ms:.1f}ms"
        )
        return response

    @app.middleware("http")
    async def set_security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Return HTTP errors as {"error": ...}."""
        error = "Route not found" if exc.status_code == 404 else exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": error},
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        """Log exceptions raised outside the middleware stack and return a generic 500."""
        return internal_error_response(request, exc)

    # Include routers
    app.include_router(attributes.router, prefix="/api/attributes", tags=["Attributes"])
    app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
    app.include_router(products.router, prefix="/api/products", tags=["Products"])

    @app.get("/api/health", tags=["Health"])
    async def health_check(request: Request):
        """Health check endpoint."""
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.monotonic() - request.app.state.started_at,
        }

    @app.get("/api", tags=["Health"])
    async def api_info():
        """Describe the available endpoints and their query parameters."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "endpoints": {
                "health": {"method": "GET", "path": "/api/health"},
                "attributes": {
                    "method": "GET",
                    "path": "/api/attributes",
                    "queryParams": {
                        "categoryNodes": "Selected category IDs (repeatable or comma-separated)",
                        "linkType": "direct, inherited and/or global",
                        "notApplicable": "Return attributes not applicable to the selection",
                        "keyword": "Search keyword",
                        "page": "Page number (default: 1)",
                        "limit": f"Items per page (default: {settings.default_page_size})",
                        "sortBy": "name, type, created_at or product_count",
                        "sortOrder": "asc or desc",
                    },
                },
                "categories": {
                    "method": "GET",
                    "path": "/api/categories/tree",
                    "queryParams": {
                        "includeAttributeCount": "Include attribute counts (true/false)",
                        "includeProductCount": "Include product counts (true/false)",
                    },
                },
                "products": {
                    "method": "GET",
                    "path": "/api/products",
                    "queryParams": {
                        "categoryId": "Comma-separated category IDs, descendants included",
                        "keyword": "Search keyword",
                        "page": "Page number (default: 1)",
                        "limit": f"Items per page (default: {settings.default_page_size})",
                        "sortBy": "name, category or created_at",
                        "sortOrder": "asc or desc",
                    },
                },
            },
        }

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "status": "running",
            "docs": "/docs",
            "health": "/api/health",
            "endpoints": {
                "attributes": "/api/attributes",
                "categories": "/api/categories/tree",
                "products": "/api/products",
            },
        }

    return app


app = create_app()


def run():
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "catalog_api.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
