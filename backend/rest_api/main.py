"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from shared.config.settings import settings
from shared.security.rate_limit import limiter
from rest_api.core.cors import configure_cors
from rest_api.core.errors import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.auth import router as auth_router
from rest_api.routers.dashboard import router as dashboard_router
from rest_api.routers.translation import router as translation_router
from rest_api.routers.ai import router as ai_router
from rest_api.routers.public import health_router, menus_router


# Create FastAPI application
app = FastAPI(
    title="Menu Studio REST API",
    description="Restaurant menu management with AI translation",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter

register_exception_handlers(app)
register_middlewares(app)
configure_cors(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(auth_router)
# Registered before the dashboard so /api/items/autocomplete is matched first
app.include_router(ai_router)
app.include_router(dashboard_router)
app.include_router(translation_router)
app.include_router(menus_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=settings.debug,
    )
