from fastapi import FastAPI
from dotenv import load_dotenv

# Load env before settings are read
load_dotenv()
from .logging_config import configure_logging
from .routes.health import router as health_router
from .routes.info import router as info_router


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="containerinfo", version="0.1.0")

    # Routers
    app.include_router(health_router, prefix="/health", tags=["health"])
    app.include_router(info_router, prefix="/api/info", tags=["info"])

    return app
