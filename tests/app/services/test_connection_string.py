"""Testes do ConnectionStringResolver."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from google.auth.exceptions import DefaultCredentialsError

from app.infra.secrets import GCPSecretProvider
from app.services.connection_string import ConnectionStringResolver
from config.settings.dispatcher import DispatcherSettings
from utils.errors import ConfigurationError


class FakeSecretProvider:
    """Provedor de segredos em dicionário."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = values or {}
        self.requested: list[str] = []

    def get(self, key: str, default: str | None = None) -> str | None:
        self.requested.append(key)
        return self._values.get(key, default)


SETTINGS = DispatcherSettings(secret_name="wa-acs", connection_string_env="WA_ACS_CONNECTION_STRING")


@pytest.mark.asyncio
async def test_secret_store_is_tried_first() -> None:
    env = FakeSecretProvider({"WA_ACS_CONNECTION_STRING": "endpoint=env"})
    store = FakeSecretProvider({"wa-acs": " endpoint=secret "})

    resolver = ConnectionStringResolver(SETTINGS, env_provider=env, secret_store=store)

    assert await resolver.resolve() == "endpoint=secret"
    assert env.requested == []


@pytest.mark.asyncio
async def test_falls_back_to_environment() -> None:
    env = FakeSecretProvider({"WA_ACS_CONNECTION_STRING": "endpoint=env"})
    store = FakeSecretProvider({"wa-acs": "  "})

    resolver = ConnectionStringResolver(SETTINGS, env_provider=env, secret_store=store)

    assert await resolver.resolve() == "endpoint=env"
    assert store.requested == ["wa-acs"]


@pytest.mark.asyncio
async def test_without_any_source_raises_configuration_error() -> None:
    resolver = ConnectionStringResolver(SETTINGS, env_provider=FakeSecretProvider())

    assert resolver.is_configured() is False
    with pytest.raises(ConfigurationError, match="ACS connection string not configured"):
        await resolver.resolve()


def test_is_configured_with_secret_store() -> None:
    resolver = ConnectionStringResolver(
        SETTINGS, env_provider=FakeSecretProvider(), secret_store=FakeSecretProvider()
    )
    assert resolver.is_configured() is True


@pytest.mark.asyncio
async def test_missing_gcp_credentials_fall_back_to_environment() -> None:
    client = MagicMock()
    client.access_secret_version.side_effect = DefaultCredentialsError(
        "Your default credentials were not found"
    )
    env = FakeSecretProvider({"WA_ACS_CONNECTION_STRING": "endpoint=env"})
    store = GCPSecretProvider(project_id="proj-1", client=client)

    resolver = ConnectionStringResolver(SETTINGS, env_provider=env, secret_store=store)

    assert await resolver.resolve() == "endpoint=env"
