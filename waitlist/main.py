"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from waitlist.api.middleware import RequestContextMiddleware
from waitlist.api.routes import api_router
from waitlist.core.context import ServiceContext, build_context
from waitlist.core.errors import WaitlistError
from waitlist.logging_config import setup_logging
from waitlist.settings import Settings, get_settings

# Setup logging
setup_logging()

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure in the ``{success, message}`` envelope."""

    @app.exception_handler(WaitlistError)
    async def waitlist_error_handler(_request: Request, exc: WaitlistError) -> JSONResponse:
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info(f"Rejected malformed request body: {exc.errors()}")
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = "Endpoint not found"
        else:
            message = str(exc.detail)
        return _error_response(exc.status_code, message, getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(
    context: ServiceContext | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the application around an explicit service context."""
    settings = settings or (context.settings if context else get_settings())
    context = context or build_context(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the schema on startup; release storage on shutdown."""
        await context.startup()
        logger.info(f"Server running on port {settings.port}")
        yield
        logger.info("Shutting down server...")
        await context.shutdown()

    app = FastAPI(
        title="Waitlist API",
        description="Landing page subscription capture service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn (SIGINT/SIGTERM trigger a graceful shutdown)."""
    settings = get_settings()
    uvicorn.run(
        "waitlist.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
