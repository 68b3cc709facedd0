"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

# ---------------------------------------------------------------------------
# Logging / config isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path, monkeypatch):
    """Send the application log to *tmp_path* instead of the user log dir."""
    monkeypatch.delenv("FOCUSFLOW_LOG_LEVEL", raising=False)
    import focusflow.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("focusflow").handlers.clear()
    with patch("focusflow.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    for handler in logging.getLogger("focusflow").handlers:
        handler.close()
    logging.getLogger("focusflow").handlers.clear()
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path, monkeypatch):
    """Provide the cached ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only and
    clears the lru_cache so every test gets a fresh service instance.
    """
    from focusflow.services.config_service import get_config_service

    monkeypatch.delenv("FOCUSFLOW_BACKEND_URL", raising=False)
    monkeypatch.delenv("FOCUSFLOW_ANON_KEY", raising=False)
    tmpdir = str(tmp_path / "config")
    get_config_service.cache_clear()
    with patch("focusflow.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("focusflow.services.config_service.user_data_dir", return_value=tmpdir):
            yield get_config_service()
    get_config_service.cache_clear()


@pytest.fixture()
def signed_in(tmp_config):
    """ConfigService holding credentials for a test user."""
    tmp_config.save_credentials("token-123", "user-abc", email="ada@example.com")
    return tmp_config


# ---------------------------------------------------------------------------
# Timer doubles
# ---------------------------------------------------------------------------


class FakeTickSource:
    """Tick source fired by hand.

    ``fire`` delivers ticks even after ``cancel`` to simulate callbacks that
    were already queued when the source was cancelled.
    """

    def __init__(self):
        self.callback = None
        self.cancelled = False

    @property
    def active(self) -> bool:
        return self.callback is not None and not self.cancelled

    def start(self, callback) -> None:
        self.callback = callback

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            self.callback()


class FakeTickFactory:
    """Builds FakeTickSources and remembers every one of them."""

    def __init__(self):
        self.sources: list[FakeTickSource] = []

    def __call__(self) -> FakeTickSource:
        source = FakeTickSource()
        self.sources.append(source)
        return source

    @property
    def current(self) -> FakeTickSource:
        return self.sources[-1]


class RecordingSink:
    """Notification sink that keeps every message."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_kind(self, kind: str) -> list[str]:
        return [message for k, message in self.messages if k == kind]


@pytest.fixture()
def ticks() -> FakeTickFactory:
    return FakeTickFactory()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()
