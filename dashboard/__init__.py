"""
Dashboard Package.

HTTP and WebSocket surface of the sentiment engine.

Modules:
- main: FastAPI application factory
- routers/: REST and WebSocket endpoints
- broadcast: scorecard push fan-out
"""

from .main import create_app

__all__ = ["create_app"]
