"""Domain-specific exceptions."""

from __future__ import annotations


class ProxyServiceError(RuntimeError):
    pass


class MissingQueryError(ProxyServiceError):
    pass


class ConfigurationError(ProxyServiceError):
    pass


class UpstreamError(ProxyServiceError):
    """Raised when the search provider answers with a non-success status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Search provider returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


__all__ = [
    "ConfigurationError",
    "MissingQueryError",
    "ProxyServiceError",
    "UpstreamError",
]
