"""Pydantic models shared across the handler and the upstream client."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel

from search_proxy.config import QueryDefaults

JSON_CONTENT_TYPE = "application/json"


class SearchParams(BaseModel):
    query: str | None = None
    lat: str
    lon: str
    limit: str

    @classmethod
    def from_query(cls, params: Mapping[str, str], defaults: QueryDefaults) -> "SearchParams":
        # Empty values behave like missing ones.
        return cls(
            query=params.get("query") or None,
            lat=params.get("lat") or defaults.lat,
            lon=params.get("lon") or defaults.lon,
            limit=params.get("limit") or defaults.limit,
        )


class SearchResultItem(BaseModel):
    display_name: str
    name: str
    lat: float | int | None = None
    lon: float | int | None = None
    type: str | None = None
    address: dict[str, Any]

    @classmethod
    def from_tomtom(cls, record: Mapping[str, Any]) -> "SearchResultItem":
        """Flatten one TomTom fuzzy-search result.

        ``display_name`` prefers the free-form address, then the POI name.
        ``name`` prefers the POI name, then the local name, then the
        municipality. Both chains skip empty values.
        """

        address = record.get("address") or {}
        poi = record.get("poi") or {}
        position = record.get("position")
        if not isinstance(position, Mapping):
            raise ValueError("Search result is missing its position")

        return cls(
            display_name=address.get("freeformAddress") or poi.get("name") or "Unknown",
            name=(
                poi.get("name")
                or address.get("localName")
                or address.get("municipality")
                or ""
            ),
            lat=position.get("lat"),
            lon=position.get("lon"),
            type=record.get("type"),
            address=dict(address),
        )


class SearchEnvelope(BaseModel):
    results: list[SearchResultItem]


class ErrorEnvelope(BaseModel):
    error: str
    status: int | None = None


@dataclass(slots=True)
class ProxyResponse:
    status_code: int
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def success(cls, envelope: SearchEnvelope, max_age: int) -> "ProxyResponse":
        return cls(
            status_code=200,
            body=envelope.model_dump(),
            headers={
                "Content-Type": JSON_CONTENT_TYPE,
                "Cache-Control": f"public, max-age={max_age}",
            },
        )

    @classmethod
    def failure(cls, status_code: int, error: str, *, upstream_status: int | None = None) -> "ProxyResponse":
        envelope = ErrorEnvelope(error=error, status=upstream_status)
        return cls(
            status_code=status_code,
            body=envelope.model_dump(exclude_none=True),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

    def render(self) -> bytes:
        return json.dumps(self.body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


__all__ = [
    "ErrorEnvelope",
    "JSON_CONTENT_TYPE",
    "ProxyResponse",
    "SearchEnvelope",
    "SearchParams",
    "SearchResultItem",
]
