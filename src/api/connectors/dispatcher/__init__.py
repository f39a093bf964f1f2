"""Conector HTTP do forwarder para o dispatcher."""

from api.connectors.dispatcher.http_client import (
    DispatchHttpClient,
    HttpClientConfig,
    HttpError,
)

__all__ = ["DispatchHttpClient", "HttpClientConfig", "HttpError"]
