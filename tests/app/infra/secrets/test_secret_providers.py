"""Testes dos provedores de secrets."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import NotFound, PermissionDenied
from google.auth.exceptions import DefaultCredentialsError

from app.infra.secrets import (
    EnvSecretProvider,
    GCPSecretProvider,
    secret_env_name,
    secret_version_path,
)


def _secret_client(value: str = "endpoint=secret") -> MagicMock:
    client = MagicMock()
    client.access_secret_version.return_value = SimpleNamespace(
        payload=SimpleNamespace(data=value.encode("utf-8"))
    )
    return client


class TestEnvSecretProvider:
    def test_secret_name_maps_to_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CRM_ACCESS_TOKEN", "tok")
        assert EnvSecretProvider().get("crm-access-token") == "tok"

    def test_prefix_is_applied(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WA2_ACS_CONNECTION_STRING", "endpoint=x")
        assert EnvSecretProvider(prefix="wa2").get("acs-connection-string") == "endpoint=x"

    def test_env_style_names_pass_through(self) -> None:
        assert secret_env_name("WA_ACS_CONNECTION_STRING") == "WA_ACS_CONNECTION_STRING"
        assert secret_env_name("acs-connection-string", "wa_") == "WA_ACS_CONNECTION_STRING"

    def test_blank_and_missing_return_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BLANK_SECRET", "   ")
        monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)

        provider = EnvSecretProvider()

        assert provider.get("blank-secret") is None
        assert provider.get("not-set-anywhere", "fallback") == "fallback"


class TestGCPSecretProvider:
    def test_reads_latest_version(self) -> None:
        client = _secret_client()
        provider = GCPSecretProvider(project_id="proj-1", client=client)

        assert provider.get("wa-acs-connection-string") == "endpoint=secret"
        client.access_secret_version.assert_called_once_with(
            request={"name": "projects/proj-1/secrets/wa-acs-connection-string/versions/latest"}
        )

    def test_environment_suffix_and_version(self) -> None:
        client = _secret_client()
        provider = GCPSecretProvider(
            project_id="proj-1", environment="staging", version="3", client=client
        )

        provider.get("wa-acs")

        name = client.access_secret_version.call_args.kwargs["request"]["name"]
        assert name == secret_version_path("proj-1", "wa-acs-staging", "3")

    def test_values_are_cached_per_provider(self) -> None:
        client = _secret_client()
        provider = GCPSecretProvider(project_id="proj-1", client=client)

        provider.get("wa-acs")
        provider.get("wa-acs")

        assert client.access_secret_version.call_count == 1

    @pytest.mark.parametrize(
        "error",
        [NotFound("missing"), PermissionDenied("denied"), DefaultCredentialsError("no adc")],
    )
    def test_api_errors_return_default(self, error: Exception) -> None:
        client = MagicMock()
        client.access_secret_version.side_effect = error
        provider = GCPSecretProvider(project_id="proj-1", client=client)

        assert provider.get("wa-acs") is None
        assert provider.get("wa-acs", "fallback") == "fallback"

    def test_client_creation_without_credentials_returns_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from google.cloud import secretmanager

        def _no_credentials() -> None:
            raise DefaultCredentialsError("Your default credentials were not found")

        monkeypatch.setattr(secretmanager, "SecretManagerServiceClient", _no_credentials)

        assert GCPSecretProvider(project_id="proj-1").get("wa-acs", "fallback") == "fallback"
