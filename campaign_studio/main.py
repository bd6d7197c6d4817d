from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from campaign_studio.config import get_settings

# Import routers directly from submodules
from campaign_studio.health import router as health_router
from campaign_studio.studio_view import router as studio_router
from campaign_studio.tools.campaign import router as campaign_router

INVALID_BODY_MESSAGE = "Request body must be a JSON object"


def configure_logging() -> None:
    """Ensure application logs use the INFO level by default."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(logging.INFO)

# Configure logging as soon as the module is loaded
configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    settings = get_settings()

    # Log application settings on startup
    settings_snapshot = settings.model_dump(
        exclude={"google_api_key", "openai_api_key"},
    )
    logger.info("Application settings on startup: %s", settings_snapshot)
    if settings.llm_provider == "gemini" and not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; generation requests will fail")
    if settings.llm_provider == "openai" and not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not configured; generation requests will fail")
    logger.info("Application startup complete.")

    try:
        yield  # The application is now running
    finally:
        logger.info("Application shutdown complete.")


async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})


# --- Application Setup ---

settings = get_settings()
app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, invalid_body_handler)

# --- Include Routers ---

app.include_router(campaign_router, prefix="/api")
app.include_router(health_router)
app.include_router(studio_router)
