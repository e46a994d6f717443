"""
Primary FastAPI application entry point
"""
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from myflix.api.api import api_router
from myflix.api.deps import close_connections, initialize_connections
from myflix.api.errors import register_exception_handlers
from myflix.api.middleware import BodySizeLimitMiddleware
from myflix.core.config import Settings, settings as default_settings

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


# Define application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the bucket is provisioned before the first request is accepted
    logger.info("Application startup: Initializing connections...")
    Path(app.state.settings.UPLOADS_DIR).mkdir(parents=True, exist_ok=True)
    await initialize_connections(app, app.state.settings)
    yield
    # Shutdown
    logger.info("Application shutdown: Closing connections...")
    await close_connections(app)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the FastAPI application.

    Clients are not created here; the lifespan puts them on ``app.state``.
    Tests can skip the lifespan and override the dependencies in
    ``myflix.api.deps`` instead.
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)

    # Added first so CORS wraps it and 413 responses still carry CORS headers
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.MAX_BODY_BYTES)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials="*" not in settings.BACKEND_CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    # Read-only static files under /uploads; the lifespan creates the directory
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.UPLOADS_DIR, check_dir=False),
        name="uploads",
    )

    @app.get("/", status_code=status.HTTP_200_OK, include_in_schema=False)
    async def root():
        """Root endpoint to confirm the API is running."""
        return {"message": f"Welcome to {settings.PROJECT_NAME}"}

    logger.info(f"{settings.PROJECT_NAME} application created")
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve ``app`` with uvicorn on HOST/PORT."""
    import uvicorn

    logger.info(f"Starting server on {default_settings.HOST}:{default_settings.PORT}")
    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
