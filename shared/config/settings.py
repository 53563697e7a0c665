"""
Process-wide configuration, read from the environment exactly once.

The resulting Settings object is passed into every app factory; nothing
below the factories touches os.environ.
"""
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing or malformed."""


@dataclass(frozen=True)
class JWTSettings:
    access_secret: str
    refresh_secret: str
    access_minutes: int = 60
    refresh_hours: int = 24


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt: Optional[JWTSettings]
    env: str = "development"
    sql_echo: bool = False
    log_level: str = "INFO"
    bcrypt_rounds: int = 12
    otlp_endpoint: Optional[str] = None
    metrics_enabled: bool = True
    seed_email: Optional[str] = None
    seed_password: Optional[str] = None
    user_service_url: str = "http://localhost:9091"
    catalog_service_url: str = "http://localhost:9092"
    order_service_url: str = "http://localhost:9093"
    server_port: int = 9090
    cors_origins: Tuple[str, ...] = ("*",)

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @classmethod
    def from_env(cls, require_jwt: bool = True) -> "Settings":
        load_dotenv()
        return cls(
            database_url=_database_url(),
            jwt=_jwt_settings() if require_jwt else None,
            env=os.getenv("APP_ENV", "development"),
            sql_echo=_bool("SQL_ECHO", False),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            bcrypt_rounds=_int("BCRYPT_ROUNDS", 12),
            otlp_endpoint=os.getenv("OTLP_ENDPOINT") or None,
            metrics_enabled=_bool("METRICS_ENABLED", True),
            seed_email=os.getenv("START_USER_EMAIL") or None,
            seed_password=os.getenv("START_USER_PW") or None,
            user_service_url=os.getenv("USER_SERVICE_URL", "http://localhost:9091"),
            catalog_service_url=os.getenv("CATALOG_SERVICE_URL", "http://localhost:9092"),
            order_service_url=os.getenv("ORDER_SERVICE_URL", "http://localhost:9093"),
            server_port=_int("SERVER_PORT", 9090),
            cors_origins=_list("CORS_ALLOW_ORIGINS", ("*",)),
        )


def _database_url() -> str:
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    host = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
    port = os.getenv("POSTGRES_PORT", "5433")
    name = os.getenv("POSTGRES_DB", "ecommerce")
    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"


def _jwt_settings() -> JWTSettings:
    access_secret = os.getenv("JWT_ACCESS_SECRET_KEY")
    refresh_secret = os.getenv("JWT_REFRESH_SECRET_KEY")
    missing = [
        name
        for name, value in (
            ("JWT_ACCESS_SECRET_KEY", access_secret),
            ("JWT_REFRESH_SECRET_KEY", refresh_secret),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"missing required environment variables: {', '.join(missing)}"
        )
    return JWTSettings(
        access_secret=access_secret,
        refresh_secret=refresh_secret,
        access_minutes=_int("JWT_ACCESS_TIME_MINUTE", 60),
        refresh_hours=_int("JWT_REFRESH_TIME_HOUR", 24),
    )


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())
