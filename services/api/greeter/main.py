"""FastAPI application entry point.

Greeter API - a greeting from PostgreSQL and a visit counter in Redis.
"""

from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator, Awaitable, Callable
import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from greeter.routes import api_router
from greeter.services.bootstrap import BootstrapFailure, bootstrap
from greeter.settings import Settings, get_settings
from greeter.stores import StoreError, StoreHandles

logger = logging.getLogger("uvicorn.error")

Bootstrapper = Callable[[Settings], Awaitable[StoreHandles | BootstrapFailure]]

ERROR_BODY = "<h1>Internal Server Error</h1>"


class StartupAborted(RuntimeError):
    """Raised from the lifespan when a store failed its bootstrap check.

    uvicorn reports the failed startup and exits without serving.
    """


def create_app(
    settings: Settings | None = None,
    *,
    bootstrapper: Bootstrapper = bootstrap,
) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager.

        Startup: connect Postgres (with retry) then Redis, publish handles.
        Shutdown: release both.
        """
        result = await bootstrapper(settings)
        if isinstance(result, BootstrapFailure):
            logger.critical(
                f"Startup aborted: {result.store} unavailable "
                f"kind={result.kind} attempts={result.attempts}"
            )
            raise StartupAborted(f"{result.store} unavailable")

        app.state.store_handles = result
        logger.info(f"Web server ready on port {settings.port}")
        try:
            yield
        finally:
            app.state.store_handles = None
            await result.aclose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Greeting from PostgreSQL with a Redis visit counter",
        lifespan=lifespan,
    )
    app.state.store_handles = None

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError) -> HTMLResponse:
        """Store failures: log store and kind, answer with a generic 500."""
        logger.error(f"{exc.store} error on {request.url.path} kind={exc.kind}")
        return HTMLResponse(ERROR_BODY, status_code=500)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
        """Anything else: same generic 500, nothing from the exception leaks."""
        logger.error(f"Unhandled error on {request.url.path} kind={type(exc).__name__}")
        return HTMLResponse(ERROR_BODY, status_code=500)

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "greeter.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
