"""Testes do wiring (factories e validação de settings)."""

from __future__ import annotations

import pytest

import app.bootstrap as bootstrap
from app.bootstrap import collect_settings_errors, dependencies, validate_runtime_settings
from app.infra.crm import MemoryCrmClient
from app.infra.stores import MemoryTrackingStore
from app.use_cases.crm import ForwardOutboundMessageUseCase
from app.use_cases.dispatch import DispatchTemplateUseCase
from config.settings.crm import CrmSettings
from config.settings.dispatcher import DispatcherSettings
from utils.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clear_caches():
    dependencies.get_dispatch_url_cache.cache_clear()
    yield
    dependencies.get_dispatch_url_cache.cache_clear()


def test_memory_tracking_store(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "get_dispatcher_settings", lambda: DispatcherSettings())
    assert isinstance(dependencies.create_tracking_store(), MemoryTrackingStore)


def test_invalid_tracking_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        dependencies, "get_dispatcher_settings", lambda: DispatcherSettings(tracking_backend="redis")
    )
    with pytest.raises(ValueError, match="TRACKING_BACKEND"):
        dependencies.create_tracking_store()


def test_create_dispatch_use_case(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "get_dispatcher_settings", lambda: DispatcherSettings())
    assert isinstance(dependencies.create_dispatch_use_case(), DispatchTemplateUseCase)


def test_create_forward_use_case_with_memory_crm(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dependencies, "get_crm_settings", lambda: CrmSettings())
    assert isinstance(dependencies.create_crm_client(), MemoryCrmClient)
    assert isinstance(dependencies.create_forward_use_case(), ForwardOutboundMessageUseCase)


def test_dispatch_url_cache_is_process_wide() -> None:
    assert dependencies.get_dispatch_url_cache() is dependencies.get_dispatch_url_cache()


def test_dataverse_without_token_is_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        dependencies,
        "get_crm_settings",
        lambda: CrmSettings(backend="dataverse", base_url="https://org", access_token_secret="test-token-unset"),
    )
    monkeypatch.setattr(dependencies, "get_dispatcher_settings", lambda: DispatcherSettings())
    monkeypatch.delenv("TEST_TOKEN_UNSET", raising=False)

    with pytest.raises(ConfigurationError, match="CRM access token not configured"):
        dependencies.create_crm_client()


def test_strict_environment_fails_on_invalid_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setattr(bootstrap, "collect_settings_errors", lambda: ["dispatcher: broken"])

    with pytest.raises(RuntimeError, match="dispatcher: broken"):
        validate_runtime_settings()


def test_collect_settings_errors_returns_list() -> None:
    assert isinstance(collect_settings_errors(), list)
