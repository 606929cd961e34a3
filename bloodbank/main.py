from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from bloodbank.config import Settings, settings
from bloodbank.database import Database, create_database
from bloodbank.middlewares.logging_middleware import LoggingMiddleware
from bloodbank.routes import router as api_router
from bloodbank.utils.exceptions import register_exception_handlers
from bloodbank.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application startup and shutdown events.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    logger.info("Application starting up...")
    try:
        await database.connect()
    except Exception as e:
        logger.critical(
            "Could not connect to the database, shutting down",
            extra={
                "extra_fields": {
                    "event_type": "database_connection_failed",
                    "error": str(e),
                }
            },
        )
        raise SystemExit(1) from e

    if app_settings.DB_CREATE_TABLES:
        await database.create_tables()
        logger.info("Database tables ensured")

    yield

    # Shutdown
    logger.info("Application shutting down...")
    await database.dispose()
    logger.info("Database connections closed successfully")


def create_application(
    app_settings: Settings = settings, database: Optional[Database] = None
) -> FastAPI:
    """Create the FastAPI application"""
    setup_logging(
        level=app_settings.LOG_LEVEL,
        environment=app_settings.ENVIRONMENT,
        log_to_file=app_settings.LOG_TO_FILE,
        log_dir=app_settings.LOG_DIR,
    )

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description=app_settings.PROJECT_DESCRIPTION,
        version=app_settings.VERSION,
        docs_url=app_settings.DOCS_URL,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = database or create_database(app_settings)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Authorization",
            "Accept",
            "X-Requested-With",
            "X-Request-ID",
            "Origin",
        ],
        expose_headers=["Content-Length", "Content-Type", "X-Request-ID"],
        max_age=600,
    )

    # Logging middleware
    app.add_middleware(LoggingMiddleware)

    # Include API routes
    app.include_router(api_router, prefix=app_settings.API_PREFIX)

    # Custom OpenAPI config for Swagger
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
            }
        }

        # Writes are guarded when REQUIRE_AUTH is on; /me always is
        me_path = f"{app_settings.API_PREFIX}/auth/me"
        auth_prefix = f"{app_settings.API_PREFIX}/auth"
        for path_key, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                guarded = path_key == me_path or (
                    app_settings.REQUIRE_AUTH
                    and method in ("post", "put", "delete")
                    and not path_key.startswith(auth_prefix)
                )
                if guarded:
                    operation.setdefault("security", []).append({"BearerAuth": []})

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    # Health check endpoints
    @app.get("/")
    def read_root():
        return {
            "status": "ok",
            "service": app_settings.PROJECT_NAME,
            "environment": app_settings.ENVIRONMENT,
        }

    @app.get("/health")
    async def health_check(request: Request):
        """Health check with database connectivity test"""
        if await request.app.state.database.ping():
            return {"status": "healthy", "database": "connected"}
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "disconnected"},
        )

    return app


app = create_application()
