"""Main application entry point."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional
import httpx
import uvicorn
import logging
from contextlib import asynccontextmanager

from . import __version__
from .api import router as api_router
from .clients.backend_client import BackendClient
from .clients.walrus import BlobVerifier
from .config import Settings, settings as default_settings

logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(),
    ],
)

logger = logging.getLogger(__name__)


async def log_requests_middleware(request: Request, call_next):
    """Log every request and the status it ended with."""
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    try:
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code}")
        return response
    except Exception as e:
        logger.exception(f"Error processing request: {e}")
        raise


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration shared by every client; defaults to the environment
        http_client: Outbound HTTP client; one is created and owned by the app if omitted
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan management."""
        client = http_client or httpx.AsyncClient(timeout=settings.http_timeout)
        app.state.settings = settings
        app.state.backend_client = BackendClient(
            settings, client, BlobVerifier(settings, client)
        )
        logger.info(f"Forwarding to backend at {settings.backend_base}")
        yield
        if http_client is None:
            await client.aclose()
        logger.info("Shutting down Donatello Gateway...")

    app = FastAPI(
        title="Donatello Gateway",
        description="Chat, image upload and NFT mint relay for the Donatello backend",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure properly in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(log_requests_middleware)

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"name": "Donatello Gateway", "version": __version__, "status": "running"}

    @app.get("/health")
    async def health():
        """Liveness of this process only."""
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "donatello_gateway.main:app",
        host=default_settings.server_host,
        port=default_settings.server_port,
        reload=default_settings.debug,
    )


if __name__ == "__main__":
    run()
