"""WSGI entry point for the to-do client."""

import os

from todo_client import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
