from __future__ import annotations

import logging
import os
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

import crypto_registry
from registry.api import create_app
from registry.services.asset_store import AssetStore


def test_serve_hands_log_level_to_server_process(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    with patch("uvicorn.run") as run, patch.object(crypto_registry, "setup_logging"):
        assert crypto_registry.main(["--log-level", "debug", "serve", "--port", "9001"]) == 0

    assert os.environ["LOG_LEVEL"] == "DEBUG"
    run.assert_called_once()
    args, kwargs = run.call_args
    assert args == ("registry.api:app",)
    assert kwargs["port"] == 9001
    assert kwargs["log_level"] == "debug"


def test_app_startup_uses_exported_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    try:
        with TestClient(create_app(MagicMock(spec=AssetStore))):
            assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
