import os
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .config import load_settings
from .logging_utils import setup_logging
from .routes.convert import router as convert_router
from .routes.health import router as health_router
from .routes.validate import router as validate_router
from .routes.waitlist import router as waitlist_router
from .services.conversion import ConversionService
from .services.gateway import LLMGateway
from .services.waitlist import WaitlistWriter

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    # Load environment variables from .env if present
    if os.getenv("DOTENV_DISABLED", "false").lower() not in {"1", "true", "yes"}:
        load_dotenv()

    settings = load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="JSON Prompt Converter API", version="1.0.0")

    # Shared collaborators, built once per process
    gateway = LLMGateway(settings)
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.conversion = ConversionService(gateway, settings.prompts)
    app.state.waitlist = WaitlistWriter(settings)

    if not settings.llm_configured:
        logger.warning("OPENAI_API_KEY is not set; conversion and repair requests will fail.")
    if not settings.database_configured:
        logger.warning("Supabase is not configured; waitlist sign-ups are disabled.")

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(health_router, prefix="/api")
    app.include_router(convert_router, prefix="/api")
    app.include_router(validate_router, prefix="/api")
    app.include_router(waitlist_router, prefix="/api")

    return app
