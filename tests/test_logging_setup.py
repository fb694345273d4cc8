"""
Tests for configure_logging.
"""

import logging
import sys

import pytest

from cep_temp import logging_setup
from cep_temp.logging_setup import LOG_FORMAT, configure_logging


class TestConfigureLogging:
    """Tests for process-wide logging setup."""

    def test_basic_config_arguments(self, monkeypatch: pytest.MonkeyPatch) -> None:
        captured = {}
        monkeypatch.setattr(logging_setup.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
        monkeypatch.setattr(logging.getLogger("uvicorn.access"), "level", logging.NOTSET)

        configure_logging("debug")

        assert captured["level"] == logging.DEBUG
        assert captured["format"] == LOG_FORMAT
        assert captured["stream"] is sys.stdout
        assert captured["force"] is True
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        captured = {}
        monkeypatch.setattr(logging_setup.logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
        monkeypatch.setattr(logging.getLogger("uvicorn.access"), "level", logging.NOTSET)

        configure_logging("chatty")

        assert captured["level"] == logging.INFO
