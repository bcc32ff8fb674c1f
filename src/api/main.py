"""FastAPI application entry point."""

import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adapter.mongodb.connection import ensure_all_indexes, get_mongodb_client, reset_client
from api.dependencies import get_settings
from api.routes import cats, dogs, events, health
from services.notification_hub import NotificationHub
from utils.config import ConfigService, default_env_file
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)

_project_root = Path(__file__).resolve().parent.parent.parent
try:
    with open(_project_root / "pyproject.toml", "rb") as f:
        VERSION = tomllib.load(f)["project"]["version"]
except FileNotFoundError:
    VERSION = "unknown"

SERVICE_NAME = "Cats API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: build process-scoped collaborators, tear them down on exit."""
    settings = get_settings()
    setup_structured_logging(settings.log_level, service=SERVICE_NAME)

    app.state.hub = NotificationHub(send_timeout=settings.notify_send_timeout)

    client = get_mongodb_client(settings.mongo_url)
    if client:
        if ensure_all_indexes(client[settings.mongodb_database]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable, skipping index creation")

    yield

    await app.state.hub.close()
    reset_client()


app = FastAPI(
    title=SERVICE_NAME,
    description="Cats and dogs resources with authenticated create-and-notify",
    version=VERSION,
    lifespan=lifespan,
)

# Browsers reject credentials with a wildcard origin
cors_origins_env = ConfigService(default_env_file()).get("CORS_ORIGINS", "*")
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cats.router)
app.include_router(dogs.router)
app.include_router(events.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=get_settings().port,
        access_log=False,
    )
