"""FastAPI server for the Shiptivity API.

This module is a thin ASGI entrypoint that delegates to create_app().
"""

from shiptivity.api.app import create_app

app = create_app()
