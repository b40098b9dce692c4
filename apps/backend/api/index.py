"""
Serverless entry point.

Serverless Python runtimes import this file and serve the ASGI `app` it
exposes for each request; nothing here binds a socket.
"""
from app.main import app

__all__ = ["app"]
