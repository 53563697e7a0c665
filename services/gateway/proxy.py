"""
Path-prefix reverse proxy.

The gateway adds no authentication of its own: headers (Authorization
included) and bodies are forwarded untouched, and the upstream response is
relayed as-is apart from redirects aimed at the upstream's own address.
Only transport failures are turned into an error here.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Tuple

import httpx
from fastapi import Request, Response, status
from starlette.exceptions import HTTPException

from shared.config.settings import Settings
from shared.errors import AppError, ErrorKind
from shared.observability.metrics import ecomm_gateway_upstream_errors_total

# RFC 7230 section 6.1 plus content-length, which httpx recomputes.
# Host is kept so upstreams build redirects against the gateway address.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
        "content-length",
    }
)


@dataclass(frozen=True)
class Upstream:
    service: str
    base_url: str


def routes_from_settings(settings: Settings) -> Dict[str, Upstream]:
    user = Upstream("user", settings.user_service_url)
    catalog = Upstream("catalog", settings.catalog_service_url)
    order = Upstream("order", settings.order_service_url)
    return {
        "/auth": user,
        "/user": user,
        "/category": catalog,
        "/product": catalog,
        "/catalog": catalog,
        "/order": order,
    }


def _forwardable(headers: Iterable[Tuple[str, str]], drop=()) -> List[Tuple[str, str]]:
    return [
        (name, value)
        for name, value in headers
        if name.lower() not in HOP_BY_HOP_HEADERS and name.lower() not in drop
    ]


def _public_location(location: str, upstream: Upstream, request: Request) -> str:
    """Point an absolute redirect at the upstream back at the gateway."""
    internal = upstream.base_url.rstrip("/")
    if location == internal or location.startswith(internal + "/"):
        return str(request.base_url).rstrip("/") + location[len(internal):]
    return location


class ReverseProxy:

    def __init__(self, routes: Mapping[str, Upstream], client: httpx.AsyncClient, logger):
        # Longest prefix wins
        self._routes = sorted(routes.items(), key=lambda item: len(item[0]), reverse=True)
        self._client = client
        self._logger = logger

    @property
    def routes(self) -> Dict[str, str]:
        return {prefix: upstream.service for prefix, upstream in sorted(self._routes)}

    def resolve(self, path: str) -> Upstream:
        """Match on whole path segments: /order and /order/1 match /order, /orders does not."""
        for prefix, upstream in self._routes:
            if path == prefix or path.startswith(prefix + "/"):
                return upstream
        raise AppError(ErrorKind.NOT_FOUND, f"no upstream for path {path}")

    def _request_headers(self, request: Request) -> List[Tuple[str, str]]:
        headers = _forwardable(request.headers.items(), drop={"x-forwarded-for", "x-forwarded-host"})

        client_ip = request.client.host if request.client else None
        forwarded_for = request.headers.get("x-forwarded-for")
        if client_ip:
            forwarded_for = f"{forwarded_for}, {client_ip}" if forwarded_for else client_ip
        if forwarded_for:
            headers.append(("x-forwarded-for", forwarded_for))

        host = request.headers.get("x-forwarded-host") or request.headers.get("host")
        if host:
            headers.append(("x-forwarded-host", host))
        return headers

    async def forward(self, request: Request) -> Response:
        path = request.url.path
        upstream = self.resolve(path)
        url = upstream.base_url.rstrip("/") + path

        try:
            upstream_response = await self._client.request(
                request.method,
                url,
                params=request.query_params.multi_items(),
                headers=self._request_headers(request),
                content=await request.body(),
            )
        except httpx.RequestError as exc:
            ecomm_gateway_upstream_errors_total.labels(service=upstream.service).inc()
            self._logger.error(
                "upstream unreachable", service=upstream.service, url=url, error=str(exc)
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail="service unavailable"
            ) from exc

        self._logger.info(
            "request proxied",
            service=upstream.service,
            method=request.method,
            path=path,
            status=upstream_response.status_code,
        )
        # httpx has already decoded the body
        response = Response(content=upstream_response.content, status_code=upstream_response.status_code)
        for name, value in _forwardable(upstream_response.headers.multi_items(), drop={"content-encoding"}):
            if name.lower() == "location":
                value = _public_location(value, upstream, request)
            response.headers.append(name, value)
        return response
