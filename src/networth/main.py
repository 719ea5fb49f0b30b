"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from networth.config.settings import get_settings
from networth.config.logging_config import setup_logging
from networth.app_context import AppContext, set_app_context
from networth.api.routers import valuation_router, holdings_router, exchange_rate_router
from networth.core.exceptions import AppError, ConversionUnavailableError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    context = AppContext()
    set_app_context(context)
    yield
    # Shutdown
    await context.aclose()
    set_app_context(None)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Multi-market portfolio valuation and net worth history",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(valuation_router)
app.include_router(holdings_router)
app.include_router(exchange_rate_router)


@app.exception_handler(ConversionUnavailableError)
async def conversion_error_handler(request: Request, exc: ConversionUnavailableError) -> JSONResponse:
    """A missing exchange rate means no total can be reported."""
    return JSONResponse(
        status_code=503,
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=400,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
