from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import structlog
import time

from catalog.core.config import Settings, get_settings
from catalog.core.database import build_engine, build_session_factory, init_models, ping
from catalog.core.errors import CatalogError
from catalog.core.logging import configure_logging
from catalog.core.unit_of_work import sqlalchemy_unit_of_work_factory
from catalog.api import events, properties, tracking_plans

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events"""
    settings = app.state.settings
    logger.info("application_startup", app_name=settings.app_name)
    if settings.db_create_all:
        await init_models(app.state.engine)
    yield
    await app.state.engine.dispose()
    logger.info("application_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        lifespan=lifespan
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.uow_factory = sqlalchemy_unit_of_work_factory(build_session_factory(engine))

    register_middleware(app)
    register_exception_handlers(app)

    # Include routers
    app.include_router(events.router)
    app.include_router(properties.router)
    app.include_router(tracking_plans.router)

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint"""
        database_ok = await ping(request.app.state.engine)
        return JSONResponse(
            status_code=200 if database_ok else 503,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "app": settings.app_name,
                "database": "ok" if database_ok else "unavailable"
            }
        )

    return app


def register_middleware(app: FastAPI) -> None:
    # Middleware for logging requests
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        structlog.contextvars.clear_contextvars()
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2)
        )

        return response


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            content = {"error": "Route not found", "details": {"path": request.url.path}}
        else:
            content = {"error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_exception", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


app = create_app()
