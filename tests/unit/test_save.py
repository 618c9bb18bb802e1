#!/usr/bin/env python3
"""
Unit tests for the save entry points
"""

import logging
import pytest
import sys
import threading
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from cache_save import save as save_module
from cache_save.backend import UnavailableCacheService
from cache_save.config import ActionConfig
from cache_save.logging_utils import install_thread_excepthook
from cache_save.state import ActionStateProvider, NullStateProvider


class RecordingService:

    def __init__(self):
        self.saved = []

    def is_feature_available(self):
        return True

    def save_cache(self, paths, key, upload_chunk_size=None, enable_cross_os_archive=False):
        self.saved.append(key)
        return 1

    def restore_cache(self, paths, primary_key, restore_keys=(), lookup_only=False,
                      enable_cross_os_archive=False):
        return None


@pytest.fixture(autouse=True)
def keep_excepthook(monkeypatch):
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)


@pytest.fixture
def service(monkeypatch):
    service = RecordingService()
    monkeypatch.setattr(save_module, "load_cache_service", lambda spec: service)
    return service


BASE_ENV = {
    "GITHUB_EVENT_NAME": "push",
    "GITHUB_REF": "refs/heads/main",
    "INPUT_PATH": "~/.npm",
    "INPUT_KEY": "linux-npm",
}


class TestRun:

    def test_saves_and_exits_zero(self, service):
        code = save_module.run(lambda config: ActionStateProvider(config.state), BASE_ENV)
        assert code == 0
        assert service.saved == ["linux-npm"]

    def test_state_key_from_environment(self, service):
        env = dict(BASE_ENV, STATE_CACHE_KEY="linux-npm-restored")
        save_module.run(lambda config: ActionStateProvider(config.state), env)
        assert service.saved == ["linux-npm-restored"]

    def test_missing_required_path_exits_one(self, service, caplog):
        env = {k: v for k, v in BASE_ENV.items() if k != "INPUT_PATH"}
        code = save_module.run(lambda config: NullStateProvider(), env)
        assert code == 1
        assert service.saved == []
        assert "Input required and not supplied: path" in caplog.messages

    def test_without_backend_warns_and_exits_zero(self, caplog):
        code = save_module.run(lambda config: NullStateProvider(), BASE_ENV)
        assert code == 0
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_bad_request_timeout_exits_zero(self, service):
        env = dict(BASE_ENV, CACHE_SAVE_REQUEST_TIMEOUT="thirty")
        code = save_module.run(lambda config: NullStateProvider(), env)
        assert code == 0
        assert service.saved == ["linux-npm"]

    def test_unknown_log_level_exits_zero(self, service, caplog):
        env = dict(BASE_ENV, CACHE_SAVE_LOG_LEVEL="basic_format")
        code = save_module.run(lambda config: NullStateProvider(), env)
        assert code == 0
        assert service.saved == ["linux-npm"]
        assert "[warning]Unknown log level 'BASIC_FORMAT', using INFO" in caplog.messages

    def test_broken_backend_spec_falls_back(self, caplog):
        config = ActionConfig(cache_backend="not-a-spec")
        assert isinstance(save_module.build_cache_service(config), UnavailableCacheService)
        assert any("Failed to load cache backend" in m for m in caplog.messages)


class TestThreadExcepthook:

    def test_thread_errors_become_warnings(self, caplog):
        install_thread_excepthook()

        def upload_chunk():
            raise OSError("file descriptor closed")

        worker = threading.Thread(target=upload_chunk)
        worker.start()
        worker.join()

        assert "[warning]file descriptor closed" in caplog.messages
