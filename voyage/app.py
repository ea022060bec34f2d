# FILE: voyage/app.py
"""
FastAPI application entry point for the Voyage backend
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from voyage import __version__
from voyage.config import get_settings
from voyage.exceptions import NotFoundError, StoreError, ValidationError
from voyage.middleware.body_limit import BodySizeLimitMiddleware
from voyage.middleware.rate_limit import RateLimitMiddleware
from voyage.routes import health, memories

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown"""
    settings = get_settings()
    logger.info(f"Starting Voyage backend v{__version__} (memory_dir={settings.memory_dir})")
    if settings.auth_secret == "change-me" and settings.environment != "development":
        logger.warning("AUTH_SECRET is the default value outside development")

    yield

    logger.info("Shutting down Voyage backend")


def _validation_errors(exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(loc) or None,
            "msg": err.get("msg", "Invalid value")
        })
    return errors


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Voyage API",
        description="Travel memory journal: memories grouped by year and month",
        version=__version__,
        lifespan=lifespan
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting
    if settings.rate_limit_enabled:
        app.add_middleware(RateLimitMiddleware, rpm=settings.rate_limit_rpm)

    # Body size limit
    app.add_middleware(BodySizeLimitMiddleware, max_size=settings.body_size_limit_mb * 1024 * 1024)

    # Exception handlers
    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        logger.warning(f"Validation failed ({exc.kind}): {exc.message}")
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "kind": exc.kind, "errors": exc.errors}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = _validation_errors(exc)
        logger.warning(f"Request validation failed: {errors}")
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "kind": "invalid-field", "errors": errors}
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=500, content={"message": "Server error"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Server error"})

    # Include routers
    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(memories.router, prefix="/memories", tags=["memories"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": "Voyage",
            "version": __version__,
            "status": "active"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "voyage.app:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.environment == "development"
    )
