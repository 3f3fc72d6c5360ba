"""
FastAPI Todo API package.

The ASGI application lives in `todo_api.main` (`todo_api.main:app` for
uvicorn); `todo_api.main.create_app` builds one with an injected repository.
"""

__version__ = "0.1.0"
