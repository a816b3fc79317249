import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.application import SiteService
from backend.core.app_logging import get_logger, setup_logging
from backend.core.store import JsonFileStore
from backend.core.validation import ValidationError
from backend.routes import auth, dashboard, materials, notifications, projects, workers

logger = get_logger(__name__)


def create_app(service: SiteService | None = None) -> FastAPI:
    setup_logging()
    app = FastAPI(title="Site Resource Tracker API", version="0.1.0")

    if service is None:
        store = JsonFileStore()
        service = SiteService(store)
        logger.info("store_opened", root=str(store.root))
    app.state.site_service = service

    origins_env = os.getenv("API_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    if not origins:
        origins = ["http://localhost:3000", "http://127.0.0.1:3000"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_failed(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info("command_rejected", path=request.url.path, reason=str(exc))
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    app.include_router(auth.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")
    app.include_router(workers.router, prefix="/api")
    app.include_router(projects.router, prefix="/api")
    app.include_router(materials.router, prefix="/api")
    app.include_router(notifications.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Site Resource Tracker API",
                "docs": "/docs",
                "health": "/api/auth/me",
            }
        )

    return app


app = create_app()
