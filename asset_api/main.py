from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from asset_api import __version__
from asset_api.core.config import Settings, get_settings
from asset_api.core.errors import ErrorKind, ErrorOutcome, map_exception
from asset_api.core.logging import configure_logging
from asset_api.infrastructure.database.session import build_engine, build_session_factory, init_db
from asset_api.infrastructure.storage import ObjectStore, build_object_store
from asset_api.interfaces.http.routers import create_api_router
from asset_api.modules.assets.activity import ActivitySink
from asset_api.modules.assets.exceptions import AssetError
from asset_api.modules.assets.handlers import AssetHandlers
from asset_api.schemas import HealthResponse


def _error_response(error: ErrorOutcome) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "error": error.to_dict()},
    )


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AssetError)
    async def asset_error_handler(request: Request, exc: AssetError) -> JSONResponse:
        return _error_response(map_exception(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        field = None
        if errors and errors[0].get("loc"):
            field = str(errors[0]["loc"][-1])
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return _error_response(ErrorOutcome(ErrorKind.VALIDATION, message, field))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 401:
            kind = ErrorKind.UNAUTHORIZED
        elif exc.status_code == 404:
            kind = ErrorKind.NOT_FOUND
        elif exc.status_code < 500:
            kind = ErrorKind.VALIDATION
        else:
            kind = ErrorKind.UNEXPECTED
        response = JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error": ErrorOutcome(kind, str(exc.detail)).to_dict(),
            },
        )
        if exc.status_code == 401:
            response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return _error_response(map_exception(exc, operation=f"handle {request.method} {request.url.path}"))


def create_app(
    settings: Optional[Settings] = None,
    *,
    object_store: Optional[ObjectStore] = None,
    activity_sink: Optional[ActivitySink] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_db(engine)
        yield
        await engine.dispose()

    app = FastAPI(
        title=settings.project_name,
        description="Ownership-scoped asset tracking API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.asset_handlers = AssetHandlers(
        build_session_factory(engine),
        object_store=object_store or build_object_store(settings.storage),
        activity_sink=activity_sink,
        pagination=settings.pagination,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    _install_exception_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    return app
