"""Shared pytest fixtures for proxy tests."""

from __future__ import annotations

import pytest
from pydantic import SecretStr

from search_proxy.config import ProxySettings, TomTomSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in ("VITE_TOMTOM_API_KEY", "TOMTOM_API_KEY", "SEARCH_PROXY_TOMTOM__API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings():
    def _factory(api_key: str | None = "test-key", **tomtom_overrides) -> ProxySettings:
        tomtom_overrides.setdefault("retry_base_delay", 0)
        tomtom = TomTomSettings(
            api_key=SecretStr(api_key) if api_key is not None else None,
            **tomtom_overrides,
        )
        return ProxySettings(_env_file=None, tomtom=tomtom)

    return _factory


@pytest.fixture
def coffee_result() -> dict:
    return {
        "type": "Point Address",
        "position": {"lat": 12.9721, "lon": 77.5933},
        "address": {
            "freeformAddress": "123 Main St",
            "municipality": "Bengaluru",
            "countryCode": "IN",
        },
    }
