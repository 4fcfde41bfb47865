"""Tests for the dependency injection container."""

from unittest.mock import MagicMock

from auditscan.api.deps.dependencies import (
    ServiceCache,
    get_scan_orchestrator,
    get_session_identity,
)
from auditscan.application.services import ScanDispatcher, ScanOrchestrator
from auditscan.configs import Settings
from auditscan.configs.scans import ScanSettings
from auditscan.core.analysis import LifecycleAnalysisEngine


def test_session_identity_from_headers():
    identity = get_session_identity(
        x_user_id="abc",
        x_user_email="dev@example.com",
        x_user_name="Dev",
        x_user_image=None,
    )

    assert identity.user_id == "abc"
    assert identity.email == "dev@example.com"
    assert identity.is_authenticated


def test_session_identity_without_headers_is_anonymous():
    identity = get_session_identity(None, None, None, None)

    assert not identity.is_authenticated


def test_blank_headers_are_anonymous():
    identity = get_session_identity("  ", " ", None, None)

    assert not identity.is_authenticated


def test_service_cache_reuses_dispatcher(monkeypatch):
    monkeypatch.setattr(
        "auditscan.api.deps.dependencies.get_async_session_factory",
        lambda: MagicMock(),
    )
    cache = ServiceCache()

    dispatcher = cache.dispatcher

    assert isinstance(dispatcher, ScanDispatcher)
    assert isinstance(dispatcher.engine, LifecycleAnalysisEngine)
    assert cache.dispatcher is dispatcher
    cache.clear()
    assert cache.dispatcher is not dispatcher


def test_scan_orchestrator_uses_configured_page_size():
    settings = Settings(scans=ScanSettings(page_size=5))
    dispatcher = MagicMock()

    orchestrator = get_scan_orchestrator(db=MagicMock(), dispatcher=dispatcher, settings=settings)

    assert isinstance(orchestrator, ScanOrchestrator)
    assert orchestrator.scan_service.page_size == 5
    assert orchestrator.dispatcher is dispatcher
