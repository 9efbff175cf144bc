from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import ensure_source_configured, settings, setup_logging
from app.dependencies import build_services
from app.exceptions import ConfigurationError
from app.utils.logging_helpers import sanitize_url_for_logging

from app.routers import main_router


setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events"""
    logger.info("Starting Xtream M3U Proxy...")

    try:
        source_url = ensure_source_configured(settings)
        logger.info(f"Serving playlist from {sanitize_url_for_logging(source_url)}")
    except ConfigurationError as e:
        # Keep serving; playlist endpoints report the error per request
        logger.error(f"Configuration error: {e}")

    logger.info("Xtream M3U Proxy started")

    yield

    logger.info("Xtream M3U Proxy stopped")


app = FastAPI(
    title="Xtream M3U Proxy",
    version="0.1.0",
    lifespan=lifespan
)

build_services(app, settings)
app.include_router(main_router)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors with details"""
    logger.error(f"Validation error for {request.method} {request.url.path}")
    logger.error(f"Validation details: {exc.errors()}")

    errors = []
    for error in exc.errors():
        error_dict = {
            "type": error.get("type"),
            "loc": error.get("loc"),
            "msg": error.get("msg"),
            "input": str(error.get("input", ""))[:100]
        }
        errors.append(error_dict)

    return JSONResponse(
        status_code=422,
        content={
            "detail": errors
        }
    )
