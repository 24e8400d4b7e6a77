import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from hybrid_selector.api.router import api_router
from hybrid_selector.config.settings import Settings
from hybrid_selector.services.cache import CacheWarmer
from hybrid_selector.services.hybrid import HybridSelector


def setup_logging(debug: bool = False) -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    # Configure root logger
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)

    # Quieten uvicorn access logs (we'll log requests ourselves)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Explicit settings; loaded from the environment when omitted
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: startup and shutdown events."""
        # Startup
        setup_logging(settings.debug)
        logger.info("Hybrid selector API starting up")

        selector = HybridSelector(settings)
        app.state.settings = settings
        app.state.selector = selector

        if settings.enable_cache_warming and settings.enable_intelligent_caching:
            stats = await CacheWarmer(selector.cache).warm(force=True)
            logger.info(f"Cache warmed with {stats.successful_warming} strategies")

        yield
        # Shutdown
        logger.info("Hybrid selector API shutting down")

    app = FastAPI(
        title="Hybrid Selector API",
        description="Three-tier file selection for course project evaluation",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log failed requests and selection calls, skipping OPTIONS preflight."""
        if request.method == "OPTIONS" or request.url.path == "/health":
            return await call_next(request)

        response = await call_next(request)

        path = request.url.path
        if response.status_code >= 400 or (
            request.method == "POST" and "file-selection" in path
        ):
            logger.info(f"{request.method} {path} -> {response.status_code}")

        return response

    # Include API routes
    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
