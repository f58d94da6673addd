"""Tests for logging setup."""

import logging

from agent_network.utils.logging import NOISY_LOGGERS, get_logger, setup_logging


def test_setup_quiets_third_party_loggers():
    setup_logging("DEBUG")

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_setup_reads_configured_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    setup_logging()

    assert logging.getLogger("anthropic").level == logging.WARNING


def test_get_logger():
    assert get_logger("agent_network.network") is logging.getLogger("agent_network.network")
