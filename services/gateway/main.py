"""
API gateway: forwards every request to the service owning its path prefix.

Run with `uvicorn --factory services.gateway.main:create_gateway_app`.
"""
from typing import Optional

import httpx
from fastapi import FastAPI, Request

from shared.config.app_factory import configure_cors
from shared.config.settings import Settings
from shared.errors import register_error_handlers
from shared.observability import setup_observability

from .proxy import ReverseProxy, routes_from_settings

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


def create_gateway_app(
    settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None
) -> FastAPI:
    # The gateway never verifies tokens, so it needs no JWT secrets
    settings = settings or Settings.from_env(require_jwt=False)
    gateway_app = FastAPI(title="API Gateway", version="1.0.0")
    gateway_app.state.settings = settings

    # --- OBSERVABILITY BOOTSTRAP ---
    logger = setup_observability(gateway_app, "gateway", settings)
    register_error_handlers(gateway_app)
    configure_cors(gateway_app, settings)

    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=30.0)
    proxy = ReverseProxy(routes_from_settings(settings), client, logger)
    gateway_app.state.proxy = proxy

    @gateway_app.get("/", include_in_schema=False)
    async def index():
        return {"service": "gateway", "routes": proxy.routes}

    @gateway_app.get("/health", include_in_schema=False)
    async def health_check():
        return {"service": "gateway", "status": "running"}

    @gateway_app.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
    async def forward(request: Request, path: str):
        return await proxy.forward(request)

    @gateway_app.on_event("shutdown")
    async def close_client():
        if owns_client:
            await client.aclose()

    return gateway_app
