"""Location search proxy: query params in, simplified JSON envelope out."""

from __future__ import annotations

from typing import Mapping

import httpx

from search_proxy.config import ProxySettings
from search_proxy.domain.models import ProxyResponse, SearchEnvelope, SearchParams
from search_proxy.logging import logger
from search_proxy.services.exceptions import ConfigurationError, MissingQueryError, UpstreamError
from search_proxy.services.tomtom import TomTomSearchClient


class SearchProxyHandler:
    """Translate one inbound search request into one TomTom call.

    ``handle`` never raises: every failure is converted into a JSON error
    envelope. Only the upstream status code is forwarded on provider errors,
    never the provider's body.
    """

    def __init__(self, settings: ProxySettings, http_client: httpx.AsyncClient) -> None:
        self._settings = settings
        self._search_client = TomTomSearchClient(http_client, settings=settings.tomtom)

    async def handle(self, params: Mapping[str, str]) -> ProxyResponse:
        search_params = SearchParams.from_query(params, self._settings.defaults)
        try:
            results = await self._search(search_params)
        except MissingQueryError as exc:
            return ProxyResponse.failure(400, str(exc))
        except ConfigurationError as exc:
            return ProxyResponse.failure(500, str(exc))
        except UpstreamError as exc:
            return ProxyResponse.failure(
                exc.status_code, "Search API error", upstream_status=exc.status_code
            )
        except Exception as exc:
            logger.error("tomtom_proxy_error", error=str(exc), exc_info=True)
            return ProxyResponse.failure(500, f"Proxy error: {exc}")

        return ProxyResponse.success(
            SearchEnvelope(results=results),
            max_age=self._settings.cache_max_age_seconds,
        )

    async def _search(self, params: SearchParams):
        if not params.query:
            raise MissingQueryError("Missing query parameter")
        api_key = self._settings.api_key()
        if not api_key:
            raise ConfigurationError("API key not configured")
        return await self._search_client.search(params, api_key)


__all__ = ["SearchProxyHandler"]
