"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from datetime import timedelta

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
redis_client: redis.Redis | None = None


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, Redis and the outbound adapters.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`newsletter.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    Adapters are stored in ``app.extensions`` under ``session_store``,
    ``email_client`` and ``password_hasher``; request handlers fetch them from
    there and hand them to the workflows explicitly.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from newsletter import models as _models  # noqa: F401

    migrate.init_app(app, db)

    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        redis_client = redis.Redis.from_url(redis_url)
        try:
            redis_client.ping()
        except RedisError as exc:
            raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
        app.extensions["redis_client"] = redis_client
    else:
        redis_client = None
        app.extensions.pop("redis_client", None)

    _init_adapters(app)


def _init_adapters(app: Flask) -> None:
    """Build the session store, email client and password hasher from config."""
    from newsletter.infra.email.email_client import EmailClient
    from newsletter.infra.redis.redis_session_store import RedisSessionStore
    from newsletter.infra.security.argon2_password_hasher import Argon2PasswordHasher
    from newsletter.services._shared.ports import InMemorySessionStore

    idle = timedelta(seconds=int(app.config.get("SESSION_IDLE_TIMEOUT_SECONDS", 600)))
    if redis_client is not None:
        app.extensions["session_store"] = RedisSessionStore(r=redis_client, idle_timeout=idle)
    elif not app.config.get("ALLOW_IN_MEMORY_SESSION_STORE", True):
        raise RuntimeError(
            "REDIS_URL must be set: the in-process session store is not shared between workers"
        )
    else:
        app.logger.warning("REDIS_URL not set; using an in-process session store.")
        app.extensions["session_store"] = InMemorySessionStore(idle_timeout=idle)

    app.extensions["email_client"] = EmailClient(
        base_url=app.config["EMAIL_API_BASE_URL"],
        sender=app.config["EMAIL_SENDER"],
        authorization_token=app.config["EMAIL_AUTHORIZATION_TOKEN"],
        timeout=float(app.config.get("EMAIL_TIMEOUT_SECONDS", 10)),
    )
    app.extensions["password_hasher"] = Argon2PasswordHasher(
        time_cost=int(app.config["ARGON2_TIME_COST"]),
        memory_cost=int(app.config["ARGON2_MEMORY_COST"]),
        parallelism=int(app.config["ARGON2_PARALLELISM"]),
    )


def get_extension(name: str):
    """Return an adapter registered by :func:`init_app` on the current app."""
    try:
        return current_app.extensions[name]
    except KeyError:
        raise RuntimeError(f"Extension {name!r} is not initialized. Call init_app() first.") from None
