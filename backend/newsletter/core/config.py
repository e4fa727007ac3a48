"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env in development (no-op when absent)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    SECRET_KEY: str
        Flask secret used to sign the flash-message cookie.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    REDIS_URL: str | None
        Session store backend. When unset an in-process store is used, which
        is only suitable for a single worker.
    ALLOW_IN_MEMORY_SESSION_STORE: bool
        Whether a missing ``REDIS_URL`` may fall back to the in-process
        store. Off in production, where gunicorn runs several workers.
    APPLICATION_BASE_URL: str
        Public origin used to build confirmation links.
    EMAIL_API_BASE_URL: str
        Base URL of the transactional email HTTP API.
    EMAIL_SENDER: str
        ``From`` address for outbound email.
    EMAIL_AUTHORIZATION_TOKEN: str
        Server token sent with every email API call.
    EMAIL_TIMEOUT_SECONDS: int
        Upper bound for a single email API call.
    SESSION_COOKIE_ID_NAME: str
        Cookie carrying the opaque server-side session id.
    SESSION_IDLE_TIMEOUT_SECONDS: int
        Idle expiry applied by the session store.
    ARGON2_TIME_COST, ARGON2_MEMORY_COST, ARGON2_PARALLELISM: int
        Cost parameters for newly computed password hashes.
    USE_PROXYFIX: bool
        Trust one hop of ``X-Forwarded-*`` headers (on in production).
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Session store
    REDIS_URL = os.getenv("REDIS_URL")
    ALLOW_IN_MEMORY_SESSION_STORE = True
    SESSION_COOKIE_ID_NAME = os.getenv("SESSION_COOKIE_ID_NAME", "id")
    SESSION_IDLE_TIMEOUT_SECONDS = env_int("SESSION_IDLE_TIMEOUT_SECONDS", 600)
    SESSION_COOKIE_SECURE = env_bool("SESSION_COOKIE_SECURE", False)

    # Email delivery
    APPLICATION_BASE_URL = os.getenv("APPLICATION_BASE_URL", "http://127.0.0.1:8000")
    EMAIL_API_BASE_URL = os.getenv("EMAIL_API_BASE_URL", "https://api.postmarkapp.com")
    EMAIL_SENDER = os.getenv("EMAIL_SENDER", "newsletter@example.com")
    EMAIL_AUTHORIZATION_TOKEN = os.getenv("EMAIL_AUTHORIZATION_TOKEN", "CHANGE_ME_EMAIL")
    EMAIL_TIMEOUT_SECONDS = env_int("EMAIL_TIMEOUT_SECONDS", 10)

    # Password hashing (Argon2id)
    ARGON2_TIME_COST = env_int("ARGON2_TIME_COST", 2)
    ARGON2_MEMORY_COST = env_int("ARGON2_MEMORY_COST", 15000)
    ARGON2_PARALLELISM = env_int("ARGON2_PARALLELISM", 1)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Reverse proxy
    USE_PROXYFIX = env_bool("USE_PROXYFIX", False)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Never talks to a real email provider or Redis.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REDIS_URL = None
    EMAIL_API_BASE_URL = "https://email.test"
    # Cheap hashes keep the suite fast; verification still reads cost from the hash.
    ARGON2_MEMORY_COST = 1024
    ARGON2_TIME_COST = 1


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled, marks the session cookie secure and
    requires ``REDIS_URL``.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    SESSION_COOKIE_SECURE = True
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    # Workers must share sessions
    ALLOW_IN_MEMORY_SESSION_STORE = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
