"""
Configuration classes for the to-do client.

The client is a stateless BFF (backend-for-frontend) in front of the
remote task API: it holds no database, only the address of the task API,
the request timeout, and presentation settings for notices.
"""

from __future__ import annotations

import os


class Config:
    """Base configuration for all client environments."""

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "todo-client-dev-secret-change-in-production")

    TASK_API_URL: str = os.environ.get("TASK_API_URL", "http://localhost:8080")
    TASK_API_TIMEOUT: float = float(os.environ.get("TASK_API_TIMEOUT", "5"))

    # Notices are removed from the page after this many seconds.
    NOTICE_DISMISS_SECONDS: float = float(os.environ.get("NOTICE_DISMISS_SECONDS", "3"))


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Configuration for automated tests."""

    DEBUG: bool = True
    TESTING: bool = True

    TASK_API_URL: str = os.environ.get("TEST_TASK_API_URL", "http://task-api")
    TASK_API_TIMEOUT: float = float(os.environ.get("TEST_TASK_API_TIMEOUT", "1"))


class ProductionConfig(Config):
    """Configuration for production deployments."""

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name. When None, falls back to FLASK_ENV.

    Returns:
        The selected configuration class.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
