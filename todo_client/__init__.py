"""
To-do client Flask application factory.

Provides the ``create_app`` factory that assembles the to-do client.  The
client is a stateless Backend-for-Frontend (BFF) in front of the remote
task API: it owns a single ``TaskSyncClient`` holding the cached task
view, renders that view with Jinja templates and reports every operation
outcome as a flash notice.

The client never persists anything itself -- every change goes through
the task API first and is reflected locally only once the API confirms it.

Key Concepts Demonstrated:
- Application factory pattern (``create_app``)
- One explicitly owned sync client per app (``app.extensions``)
- Blueprint-based route registration
- Lazy import to avoid circular dependencies
"""

from __future__ import annotations

import logging

from flask import Flask, current_app

from .api_client import TaskAPIClient
from .config import get_config
from .sync import TaskSyncClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

EXTENSION_KEY = "task_sync"


def create_app(config_name: str | None = None, task_api: TaskAPIClient | None = None) -> Flask:
    """
    Create and configure the to-do client application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            *None*, the value is read from the ``FLASK_ENV`` environment
            variable, defaulting to ``"development"``.
        task_api: Optional pre-built task API client.  When *None*, one
            is created from ``TASK_API_URL`` and ``TASK_API_TIMEOUT``.

    Returns:
        A configured :class:`~flask.Flask` application with its
        ``TaskSyncClient`` registered under ``app.extensions``.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating to-do client app with config: %s", config_class.__name__)

    if task_api is None:
        task_api = TaskAPIClient(
            app.config["TASK_API_URL"],
            timeout=app.config["TASK_API_TIMEOUT"],
        )
    app.extensions[EXTENSION_KEY] = TaskSyncClient(task_api)

    # Import inside the factory to avoid circular imports -- the blueprint
    # modules reference helpers from this package, which must exist first.
    from .routes.api import api_bp
    from .routes.views import views_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(views_bp)
    return app


def get_sync_client() -> TaskSyncClient:
    """Return the ``TaskSyncClient`` owned by the current app."""
    return current_app.extensions[EXTENSION_KEY]
