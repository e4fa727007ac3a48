"""Blueprint package bundling the public and administrator routes."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized.
from .admin import bp as admin_bp
from .auth import bp as auth_bp
from .health import bp as health_bp
from .subscriptions import bp as subscriptions_bp

# Each tuple: (blueprint, url_prefix_relative_to_root)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /health_check
    (subscriptions_bp, "/subscriptions"),
    (auth_bp, ""),  # -> /login
    (admin_bp, "/admin"),
]
