"""Environment configuration.

`ConfigService` is the raw key/value source: process environment first, then
the env file parsed with python-dotenv. `Settings` is the typed view the
application is built from.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def default_env_file() -> str:
    """`ENV_FILE` if set, else `<APP_ENV>.env` (APP_ENV defaults to development)."""
    return os.getenv("ENV_FILE") or f"{os.getenv('APP_ENV', 'development')}.env"


class ConfigService:
    def __init__(self, file_path: str | Path | None = None, environ: dict[str, str] | None = None):
        path = Path(file_path) if file_path else None
        if path is not None and path.is_file():
            self._file_values = {k: v for k, v in dotenv_values(path).items() if v is not None}
            logger.debug("Loaded env file", extra={"path": str(path), "keys": len(self._file_values)})
        else:
            self._file_values = {}
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: str | None = None) -> str | None:
        if key in self._environ:
            return self._environ[key]
        return self._file_values.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        return _parse(self, key, int, default)

    def get_float(self, key: str, default: float | None) -> float | None:
        return _parse(self, key, float, default)


def _parse(config: ConfigService, key: str, cast, default):
    raw = config.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    token_expires_in: int = 3600
    default_token_subject: str = "a@example.com"
    mongo_url: str | None = None
    mongodb_database: str = "cats"
    notify_send_timeout: float | None = 5.0
    persist_timeout: float | None = 10.0
    log_level: str = "INFO"
    port: int = 8000


def load_settings(config: ConfigService | None = None) -> Settings:
    """Build Settings from `config`.

    Raises:
        ValueError: JWT_SECRET_KEY missing, or a numeric key malformed
    """
    config = config or ConfigService(default_env_file())

    secret = config.get("JWT_SECRET_KEY")
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    return Settings(
        jwt_secret_key=secret,
        jwt_algorithm=config.get("JWT_ALGORITHM", "HS256"),
        token_expires_in=config.get_int("TOKEN_EXPIRES_IN", 3600),
        default_token_subject=config.get("DEFAULT_TOKEN_SUBJECT", "a@example.com"),
        mongo_url=config.get("MONGO_URL") or None,
        mongodb_database=config.get("MONGODB_DATABASE", "cats"),
        notify_send_timeout=config.get_float("NOTIFY_SEND_TIMEOUT", 5.0),
        persist_timeout=config.get_float("PERSIST_TIMEOUT", 10.0),
        log_level=config.get("LOG_LEVEL", "INFO"),
        port=config.get_int("PORT", 8000),
    )
