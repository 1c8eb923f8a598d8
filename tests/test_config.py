from __future__ import annotations

import logging

import pytest

from pyripe._logging import configure_logging
from pyripe.config import RipeConfig


def test_defaults() -> None:
    config = RipeConfig()
    assert config.rsa_key_length == 2048
    assert config.aes_key_length == 32
    assert config.rsa_passphrase is None


def test_from_env_reads_ripe_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIPE_RSA_KEY_LENGTH", "4096")
    monkeypatch.setenv("RIPE_AES_KEY_LENGTH", "16")
    monkeypatch.setenv("RIPE_RSA_PASSPHRASE", "s3cret")
    monkeypatch.setenv("RIPE_LOG_LEVEL", "debug")

    config = RipeConfig.from_env()

    assert config.rsa_key_length == 4096
    assert config.aes_key_length == 16
    assert config.rsa_passphrase == "s3cret"
    assert config.log_level == "DEBUG"


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RIPE_RSA_KEY_LENGTH", "4096")
    config = RipeConfig.from_env(rsa_key_length=1024)
    assert config.rsa_key_length == 1024


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging("INFO")
    handlers = list(logger.handlers)

    configure_logging(logging.DEBUG)

    assert logger.handlers == handlers
    assert logger.level == logging.DEBUG
    configure_logging(logging.WARNING)
