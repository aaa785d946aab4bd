"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from brands.dependencies.brand import build_cascade_deletion_service
from brands.dependencies.connection import BRAND_CONNECTION_CACHE_STATE_KEY
from brands.infrastructure.connection_router import BrandConnectionCache
from brands.presentation import brand_scope_router
from brands.presentation import router as brands_router
from iam.dependencies.authentication import get_token_codec
from iam.dependencies.principal import set_owned_brands_cleaner_factory
from iam.presentation import router as iam_router
from infrastructure.database.dependencies import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from shared_kernel.middleware import AuthContextMiddleware

_probe = DefaultStartupProbe()


@asynccontextmanager
async def brandhouse_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - The brand connection cache (created here, disposed on shutdown)
    - Wiring brand cascade deletion into IAM account deletion
    - Administrative engine shutdown (engine is created lazily)
    """
    configure_logging()

    cache = BrandConnectionCache()
    setattr(app.state, BRAND_CONNECTION_CACHE_STATE_KEY, cache)
    set_owned_brands_cleaner_factory(build_cascade_deletion_service)
    _probe.application_started(__version__)

    yield

    evicted = cache.clear()
    _probe.application_stopping(cached_brands=len(evicted))
    for connection in evicted:
        await connection.dispose()
    set_owned_brands_cleaner_factory(None)
    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="Multi-tenant brand platform with schema-per-brand isolation",
    version=__version__,
    lifespan=brandhouse_lifespan,
)

# Resolves the caller's identity once per request
app.add_middleware(AuthContextMiddleware, codec_factory=get_token_codec)

app.include_router(iam_router)
app.include_router(brands_router)
app.include_router(brand_scope_router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP errors in the mutation envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render schema-level validation errors without echoing the input."""
    return JSONResponse(
        status_code=422,
        content={"success": False, "message": "Request validation failed"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything that escaped the routes and answer with a generic 500."""
    _probe.unhandled_error(path=request.url.path, error=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal server error"},
    )


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok", "version": __version__}
