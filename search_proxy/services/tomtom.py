"""TomTom fuzzy search integration."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from search_proxy.config import TomTomSettings
from search_proxy.domain.models import JSON_CONTENT_TYPE, SearchParams, SearchResultItem
from search_proxy.logging import logger
from search_proxy.services.exceptions import UpstreamError
from search_proxy.utils.retry import retry_async

GATEWAY_TIMEOUT = 504


class TomTomSearchClient:
    """Calls the TomTom fuzzy search endpoint and flattens its results."""

    def __init__(self, http_client: httpx.AsyncClient, settings: TomTomSettings | None = None) -> None:
        self._client = http_client
        self._settings = settings or TomTomSettings()

    def build_url(self, params: SearchParams, api_key: str) -> httpx.URL:
        encoded_query = quote(params.query, safe="!'()*")
        base = str(self._settings.base_url).rstrip("/")
        return httpx.URL(
            f"{base}/{encoded_query}.json",
            params=[
                ("key", api_key),
                ("limit", params.limit),
                ("countrySet", self._settings.country_set),
                ("lat", params.lat),
                ("lon", params.lon),
                ("radius", str(self._settings.radius_meters)),
                ("language", self._settings.language),
                ("typeahead", "true" if self._settings.typeahead else "false"),
            ],
        )

    async def search(self, params: SearchParams, api_key: str) -> list[SearchResultItem]:
        """Run one fuzzy search; the caller has already checked query and key."""

        url = self.build_url(params, api_key)

        async def _request() -> httpx.Response:
            return await self._client.get(
                url,
                headers={"Accept": JSON_CONTENT_TYPE},
                follow_redirects=True,
                timeout=self._settings.request_timeout_seconds,
            )

        try:
            response = await retry_async(
                _request,
                max_attempts=self._settings.max_attempts,
                base_delay=self._settings.retry_base_delay,
                retry_on=(httpx.NetworkError,),
                logger=logger,
                operation_name="tomtom_search",
            )
        except httpx.TimeoutException as exc:
            logger.error("tomtom_api_timeout", error=str(exc) or exc.__class__.__name__)
            raise UpstreamError(GATEWAY_TIMEOUT) from exc

        if not response.is_success:
            body = response.text
            logger.error("tomtom_api_error", status=response.status_code, body=body[:500])
            raise UpstreamError(response.status_code, body)

        return self._parse_results(response.json())

    @staticmethod
    def _parse_results(data: Any) -> list[SearchResultItem]:
        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise ValueError("Search response is missing the results list")
        return [SearchResultItem.from_tomtom(record) for record in data["results"]]


__all__ = ["GATEWAY_TIMEOUT", "TomTomSearchClient"]
