import logging

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from src.adapter.services.geoip_locator import build_geo_locator
from src.app.services.device_enricher import DeviceEnricher
from .error import ClientError, ServerError
from .middleware.request_id import RequestIDMiddleware

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(
        status_code=exc.status_code, content={"success": False, "error": error_dict}
    )


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": error_dict},
    )


def configure_logging(ApplicationConfig) -> None:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Swallowed audit failures are logged at ERROR and forwarded to Sentry
    if ApplicationConfig.ENABLE_SENTRY and ApplicationConfig.DSN_SENTRY:
        sentry_sdk.init(
            dsn=ApplicationConfig.DSN_SENTRY,
            environment=ApplicationConfig.SENTRY_ENVIRONMENT,
        )


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig)

    app = FastAPI(title="Audit Trail API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    from src.depends import unit_of_work_scope

    app.state.device_enricher = DeviceEnricher(
        build_geo_locator(ApplicationConfig.GEOIP_DB_PATH)
    )
    app.state.unit_of_work_scope = unit_of_work_scope

    from src.api.routes import admin, audit, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(audit.router, tags=["Audit"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
