"""
knowledge_base - In-memory knowledge base backend.

Sub-packages:
- core: entity store, topic graph and version history
- service: repositories, auth and REST router
- api_host: FastAPI application factory and configuration
"""

__version__ = "1.0.0"
