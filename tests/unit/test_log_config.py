"""Unit tests for the per-category logging setup."""

import logging

from goatfarm.config import Settings
from goatfarm.infrastructure.logging import log_config


def test_setup_logging_applies_category_levels(monkeypatch):
    settings = Settings(
        _env_file=None,
        log_level="DEBUG",
        log_level_http="ERROR",
        log_level_farm_api="WARNING",
    )
    monkeypatch.setattr(log_config, "get_settings", lambda: settings)

    log_config.setup_logging()

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.ERROR
    assert logging.getLogger("httpcore").level == logging.ERROR
    assert logging.getLogger("goatfarm.infrastructure.farm_api").level == logging.WARNING


def test_unknown_level_falls_back_to_info(monkeypatch):
    settings = Settings(_env_file=None, log_level_uvicorn="LOUD")
    monkeypatch.setattr(log_config, "get_settings", lambda: settings)

    log_config.setup_logging()

    assert logging.getLogger("uvicorn.access").level == logging.INFO
