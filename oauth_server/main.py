"""Main FastAPI application"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from oauth_server.api.v1 import oauth
from oauth_server.core.config import Settings, logger, settings as default_settings
from oauth_server.core.container import OAuthServices, build_services
from oauth_server.middleware.logging import StructuredLoggingMiddleware
from oauth_server.models import close_db, init_db


def create_app(
    settings: Settings | None = None,
    services: OAuthServices | None = None,
) -> FastAPI:
    """
    Build the application

    Args:
        settings: Settings to use (module settings by default)
        services: Pre-wired services (built from settings by default)

    Returns:
        FastAPI application
    """
    settings = settings or default_settings
    services = services or build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info("Starting OAuth Server...")
        logger.info(f"Environment: {settings.environment}")
        logger.info(f"Version: {settings.version}")

        try:
            await init_db(services.engine)
            logger.info("✓ Database initialized")
        except Exception as e:
            logger.error(f"Failed to initialize: {e}")
            raise

        yield

        logger.info("Shutting down OAuth Server...")
        await close_db(services.engine)

    app = FastAPI(
        title="OAuth Server",
        description="OAuth2 Authorization Code grant server",
        version=settings.version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(StructuredLoggingMiddleware)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return JSONResponse(
            content={
                "status": "healthy",
                "version": settings.version,
                "environment": settings.environment,
            }
        )

    @app.get("/")
    async def root():
        """Root endpoint"""
        return JSONResponse(
            content={
                "service": "OAuth Server",
                "version": settings.version,
                "docs": "/docs" if settings.is_development else None,
            }
        )

    app.include_router(oauth.router, prefix="/oauth", tags=["OAuth2"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "oauth_server.main:app",
        host="0.0.0.0",
        port=default_settings.port,
        reload=default_settings.is_development,
        log_level=default_settings.log_level.lower(),
    )
