# main.py
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import configure_logging, get_database_manager, get_settings, lifespan
from .errors import PERMISSION_ERROR_EVENT, PermissionDeniedError, RatingConflictError, error_emitter
from .routers import all_routers
from .schemas import ErrorResponse, HealthCheckResponse, RootResponse
from .utils.serializers import convert_object_ids

logger = logging.getLogger(__name__)


async def permission_denied_handler(request: Request, exc: PermissionDeniedError):
    error_emitter.emit(PERMISSION_ERROR_EVENT, exc)
    body = ErrorResponse(
        error="permission_denied",
        message="You do not have permission to perform this action.",
        detail=convert_object_ids(exc.to_context()),
    )
    return JSONResponse(status_code=403, content=jsonable_encoder(body))


async def rating_conflict_handler(request: Request, exc: RatingConflictError):
    logger.error("Rating conflict: %s", exc)
    body = ErrorResponse(
        error="rating_conflict",
        message="The product is being rated by others right now. Please try again.",
        detail={"product_id": exc.product_id, "attempts": exc.attempts},
    )
    return JSONResponse(status_code=409, content=jsonable_encoder(body))


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PermissionDeniedError, permission_denied_handler)
    app.add_exception_handler(RatingConflictError, rating_conflict_handler)

    @app.get("/", response_model=RootResponse, tags=["Root"])
    async def root():
        """Root endpoint - Always accessible"""
        return RootResponse(
            message=f"Welcome to {settings.app_name}",
            version=settings.app_version,
            docs="/docs",
            health="/health",
            status="running",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    @app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
    async def health_check():
        """Health check endpoint - Always accessible"""
        manager = get_database_manager()
        try:
            if manager.is_connected():
                await manager.get_database().command("ping")
                db_status = "connected"
            else:
                db_status = "disconnected"
        except Exception as e:
            db_status = f"error: {e}"

        return HealthCheckResponse(
            status="healthy",
            database=db_status,
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=settings.app_version,
        )

    for router in all_routers:
        app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("organic_mart.main:app", host=settings.host, port=settings.port, reload=settings.reload)
