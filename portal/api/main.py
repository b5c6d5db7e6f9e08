from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitegate import __version__
from sitegate.common.logger import setup_logger
from portal.core.config import get_settings
from portal.api.routers import permissions
from portal.api.middleware.capabilities import CapabilityHeaderMiddleware


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logger("sitegate", level=settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Permission resolution for construction project management",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Capability snapshot from gateway headers
    app.add_middleware(CapabilityHeaderMiddleware)

    app.include_router(permissions.router, prefix="/api")

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": __version__}

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": __version__,
            "docs": "/docs" if settings.debug else None,
        }

    return app


app = create_app()
