"""Tests for configuration and logging setup."""

from pathlib import Path

from treasure.config import Config
from treasure.logging import hash_fingerprint_processor


def test_defaults(monkeypatch):
    for key in (
        "TREASURE_HOST",
        "TREASURE_PORT",
        "TREASURE_CERTFILE",
        "TREASURE_KEYFILE",
        "TREASURE_LOG_LEVEL",
        "TREASURE_LOG_FILE",
        "TREASURE_JSON_LOGS",
        "TREASURE_HASH_FINGERPRINTS",
        "TREASURE_STARTING_LIFE",
        "TREASURE_MAX_SESSIONS",
    ):
        monkeypatch.delenv(key, raising=False)

    config = Config.from_env()
    assert config == Config()
    assert config.port == 1965
    assert config.starting_life == 1000
    assert config.max_sessions == 1000
    assert config.hash_fingerprints
    assert config.certfile is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("TREASURE_HOST", "0.0.0.0")
    monkeypatch.setenv("TREASURE_PORT", "1966")
    monkeypatch.setenv("TREASURE_CERTFILE", "/etc/treasure/cert.pem")
    monkeypatch.setenv("TREASURE_JSON_LOGS", "yes")
    monkeypatch.setenv("TREASURE_HASH_FINGERPRINTS", "0")
    monkeypatch.setenv("TREASURE_STARTING_LIFE", "500")
    monkeypatch.setenv("TREASURE_MAX_SESSIONS", "10")

    config = Config.from_env()
    assert config.host == "0.0.0.0"
    assert config.port == 1966
    assert config.certfile == Path("/etc/treasure/cert.pem")
    assert config.json_logs
    assert not config.hash_fingerprints
    assert config.starting_life == 500
    assert config.max_sessions == 10


def test_unrecognised_flag_keeps_default(monkeypatch):
    monkeypatch.setenv("TREASURE_JSON_LOGS", "maybe")
    assert not Config.from_env().json_logs


def test_fingerprints_are_hashed():
    event = hash_fingerprint_processor(None, "info", {"event": "x", "fingerprint": "abc"})
    assert "fingerprint" not in event
    assert len(event["fingerprint_hash"]) == 12

    event = hash_fingerprint_processor(None, "info", {"event": "x", "fingerprint": "unknown"})
    assert event["fingerprint"] == "unknown"
