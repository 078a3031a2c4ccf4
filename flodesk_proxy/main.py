"""FastAPI application entry point.

The route table is built once in ``create_app``: health, subscribers,
segments and custom-fields routers bound to a single dispatcher, behind
request-ID and CORS middleware. Unmatched paths fall through to the 404
envelope handler.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flodesk_proxy.config.settings import ProxySettings
from flodesk_proxy.integration.flodesk_client import FlodeskClient
from flodesk_proxy.logging_config import configure_logging
from flodesk_proxy.middleware.error_handler import (
    UnhandledErrorMiddleware,
    register_error_handlers,
)
from flodesk_proxy.middleware.request_id import RequestIdMiddleware
from flodesk_proxy.routers.custom_fields import create_custom_fields_router
from flodesk_proxy.routers.health import create_health_router
from flodesk_proxy.routers.segments import create_segments_router
from flodesk_proxy.routers.subscribers import create_subscribers_router
from flodesk_proxy.services.action_dispatcher import ActionDispatcher, UpstreamGateway
from flodesk_proxy.services.segments_service import SegmentsService
from flodesk_proxy.services.upstream_gateway import FlodeskGateway

logger = logging.getLogger(__name__)


def create_app(
    settings: ProxySettings | None = None,
    *,
    gateway: UpstreamGateway | None = None,
    segments_service: SegmentsService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``gateway`` and ``segments_service`` default to Flodesk-backed
    implementations built from ``settings``; tests inject fakes.
    """
    settings = settings or ProxySettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level, settings.log_format)
        logger.info(
            "Starting Flodesk proxy on port %d (%s)",
            settings.port,
            settings.environment,
        )
        yield
        logger.info("Flodesk proxy shut down")

    client = FlodeskClient(
        base_url=settings.flodesk_api_url,
        timeout_seconds=settings.flodesk_timeout_seconds,
        user_agent=settings.flodesk_user_agent,
    )
    if segments_service is None:
        segments_service = SegmentsService(
            client=client, page_size=settings.subscribers_page_size
        )
    if gateway is None:
        gateway = FlodeskGateway(
            client=client, page_size=settings.subscribers_page_size
        )
    dispatcher = ActionDispatcher(gateway=gateway)

    app = FastAPI(
        title="Flodesk Proxy",
        version=settings.service_version,
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # Starlette applies middleware in reverse order of add_middleware calls
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_origin_regex=settings.cors_allowed_origin_regex,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
        allow_credentials=True,
    )

    prefix = settings.api_prefix
    app.include_router(
        create_health_router(prefix=prefix, version=settings.service_version)
    )
    app.include_router(create_subscribers_router(dispatcher=dispatcher, prefix=prefix))
    app.include_router(
        create_segments_router(
            dispatcher=dispatcher,
            segments_service=segments_service,
            prefix=prefix,
        )
    )
    app.include_router(create_custom_fields_router(dispatcher=dispatcher, prefix=prefix))

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = ProxySettings()
    uvicorn.run(
        "flodesk_proxy.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


app = create_app()


if __name__ == "__main__":
    run()
