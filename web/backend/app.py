import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stepwise import __version__
from stepwise.config_manager import config
from web.backend.routers import goals

logger = logging.getLogger("stepwise.api")


def create_app() -> FastAPI:
    app = FastAPI(title="Stepwise API", version=__version__)

    raw_origins = os.getenv("STEPWISE_ALLOWED_ORIGINS", config.ALLOWED_ORIGINS)
    allow_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    allow_credentials = "*" not in allow_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": "Stepwise"}

    @app.get("/")
    async def root():
        return {
            "message": "Stepwise API is running",
            "docs": "/docs",
            "health": "/health",
        }

    app.include_router(goals.router, prefix="/api/v1/goals", tags=["goals"])
    logger.info("API ready, CORS origins: %s", allow_origins)

    return app


app = create_app()
