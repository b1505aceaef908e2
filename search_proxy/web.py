"""FastAPI application exposing the search proxy."""

from __future__ import annotations

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from starlette.datastructures import QueryParams

from search_proxy.config import ProxySettings, get_settings
from search_proxy.handler import SearchProxyHandler

SEARCH_ROUTE = "/api/tomtom-search"
SEARCH_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]


def first_query_values(query_params: QueryParams) -> dict[str, str]:
    """Collapse repeated keys, keeping the first occurrence of each."""

    return {key: value for key, value in reversed(query_params.multi_items())}


def create_app(
    settings: ProxySettings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the application.

    A caller-supplied ``http_client`` is used as-is and left open on shutdown;
    otherwise the app owns a client for its lifetime.
    """

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if http_client is not None:
            app.state.handler = SearchProxyHandler(settings, http_client)
            yield
            return
        async with httpx.AsyncClient() as client:
            app.state.handler = SearchProxyHandler(settings, client)
            yield

    app = FastAPI(title="TomTom Search Proxy", version="0.1.0", lifespan=lifespan)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.api_route(SEARCH_ROUTE, methods=SEARCH_METHODS)
    async def tomtom_search(request: Request) -> Response:
        handler: SearchProxyHandler = request.app.state.handler
        result = await handler.handle(first_query_values(request.query_params))
        return Response(
            content=result.render(),
            status_code=result.status_code,
            headers=result.headers,
        )

    return app


__all__ = ["SEARCH_METHODS", "SEARCH_ROUTE", "create_app", "first_query_values"]
