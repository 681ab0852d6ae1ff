"""
knowledge_base.api_host - FastAPI server exposing the knowledge base over REST.

Usage:
    from knowledge_base.api_host import create_app

    app = create_app()
    # Run with uvicorn: uvicorn knowledge_base.api_host.server:get_app --factory
"""

from .server import create_app
from .config import AppConfig

__version__ = "1.0.0"
__all__ = ["create_app", "AppConfig"]
