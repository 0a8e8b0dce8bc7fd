"""Configuration for Treasure Dungeon."""

import os
from dataclasses import dataclass
from pathlib import Path

from .engine.state import STARTING_LIFE
from .session import MAX_SESSIONS


def _env_flag(key: str, default: bool) -> bool:
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def _env_path(key: str) -> Path | None:
    value = os.getenv(key)
    return Path(value) if value else None


@dataclass
class Config:
    """Application configuration."""

    host: str = "localhost"
    port: int = 1965
    certfile: Path | None = None
    keyfile: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_fingerprints: bool = True
    starting_life: int = STARTING_LIFE
    max_sessions: int = MAX_SESSIONS

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from TREASURE_* environment variables."""
        return cls(
            host=os.getenv("TREASURE_HOST", cls.host),
            port=int(os.getenv("TREASURE_PORT", str(cls.port))),
            certfile=_env_path("TREASURE_CERTFILE"),
            keyfile=_env_path("TREASURE_KEYFILE"),
            log_level=os.getenv("TREASURE_LOG_LEVEL", cls.log_level),
            log_file=_env_path("TREASURE_LOG_FILE"),
            json_logs=_env_flag("TREASURE_JSON_LOGS", cls.json_logs),
            hash_fingerprints=_env_flag(
                "TREASURE_HASH_FINGERPRINTS", cls.hash_fingerprints
            ),
            starting_life=int(
                os.getenv("TREASURE_STARTING_LIFE", str(cls.starting_life))
            ),
            max_sessions=int(
                os.getenv("TREASURE_MAX_SESSIONS", str(cls.max_sessions))
            ),
        )
