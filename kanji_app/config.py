"""
Runtime configuration for the kanji backend and its tools.

Everything comes from environment variables, optionally seeded from a
``.env`` file. Entry points build one ``Settings`` at startup and pass it
down; nothing below reads ``os.environ`` directly.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_PORT = 3001
DEFAULT_DB_PORT = 5432
DEFAULT_DATA_PATH = "kanji_data.json"
DEFAULT_HOST = "0.0.0.0"

# Default dataset location, independent of the working directory.
PROJECT_ROOT = Path(__file__).resolve().parent.parent

SEED_POLICIES = ("overwrite", "skip")
SEED_GATES = ("always", "row-count")
SCHEMA_STRATEGIES = ("create", "reset", "migrate")


def env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _env_choice(environ: Mapping[str, str], name: str, choices: tuple, default: str) -> str:
    raw = environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw not in choices:
        raise ConfigError(f"{name} must be one of {', '.join(choices)}, got {raw!r}")
    return raw


def load_env_file() -> Optional[Path]:
    """Load ``ENV_FILE`` if it points at a file, else ``./.env`` when present."""
    env_file = os.getenv("ENV_FILE")
    candidates = [Path(env_file)] if env_file else []
    candidates.append(Path.cwd() / ".env")
    for candidate in candidates:
        if candidate.exists():
            load_dotenv(candidate)
            return candidate
    return None


@dataclass
class Settings:
    db_host: str = "localhost"
    db_port: int = DEFAULT_DB_PORT
    db_user: str = ""
    db_password: str = ""
    db_name: str = ""
    database_url_override: Optional[str] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    data_path: Path = PROJECT_ROOT / DEFAULT_DATA_PATH
    seed_policy: str = "overwrite"
    seed_gate: str = "always"
    schema_strategy: str = "create"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        origins = [o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            db_host=env.get("DB_HOST", "localhost") or "localhost",
            db_port=_env_int(env, "DB_PORT", DEFAULT_DB_PORT),
            db_user=env.get("DB_USER", ""),
            db_password=env.get("DB_PASSWORD", ""),
            db_name=env.get("DB_NAME", ""),
            database_url_override=env.get("DATABASE_URL", "").strip() or None,
            host=env.get("HOST", "") or DEFAULT_HOST,
            port=_env_int(env, "PORT", DEFAULT_PORT),
            data_path=Path(env.get("KANJI_DATA_PATH", "") or PROJECT_ROOT / DEFAULT_DATA_PATH),
            seed_policy=_env_choice(env, "SEED_POLICY", SEED_POLICIES, "overwrite"),
            seed_gate=_env_choice(env, "SEED_GATE", SEED_GATES, "always"),
            schema_strategy=_env_choice(env, "SCHEMA_STRATEGY", SCHEMA_STRATEGIES, "create"),
            cors_origins=origins or ["*"],
            debug=env_bool(env.get("DEBUG")),
        )

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        credentials = ""
        if self.db_user:
            credentials = quote_plus(self.db_user)
            if self.db_password:
                credentials += ":" + quote_plus(self.db_password)
            credentials += "@"
        return f"postgresql+psycopg2://{credentials}{self.db_host}:{self.db_port}/{self.db_name}"


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
