"""
App Host Server - FastAPI application exposing the knowledge base.

This module provides create_app() which builds a FastAPI application that:
- Creates the topic, resource and user repositories and the auth service
- Seeds default users when configured to
- Mounts the REST API router under the configured prefix
- Reports request validation failures as 400 and NotFound as 404

Usage:
    from knowledge_base.api_host import create_app

    # Default configuration
    app = create_app()

    # Custom configuration
    from knowledge_base.api_host.config import AppConfig
    config = AppConfig(jwt_secret="...", seed_default_users=False)
    app = create_app(config)
"""

import logging
from typing import Optional, Dict, Any

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from knowledge_base.core import NotFound
from knowledge_base.service import (
    TopicRepository, UserRepository, ResourceRepository,
    PasswordHasher, AuthService, seed_default_users, create_rest_router,
)

from .config import AppConfig

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Optional configuration object. If None, uses defaults from environment.

    Returns:
        Configured FastAPI application with the REST API mounted.
    """
    if config is None:
        config = AppConfig.from_env()

    app = FastAPI(
        title="Knowledge Base",
        description="REST API for topics, learning resources and users",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    # Every service gets its own volatile store; nothing outlives the app
    hasher = PasswordHasher(rounds=config.bcrypt_rounds)
    topics = TopicRepository()
    resources = ResourceRepository()
    users = UserRepository(hasher)
    auth = AuthService(users, hasher, config.auth_settings())

    if config.seed_default_users:
        logger.info(f"Seeding default users (env={config.app_env})")
        seed_default_users(users, config.seed_users)

    app.state.config = config
    app.state.topics = topics
    app.state.resources = resources
    app.state.users = users
    app.state.auth = auth

    rest_router = create_rest_router(topics, resources, users, auth)
    app.include_router(rest_router, prefix=config.api_prefix)

    @app.get("/health")
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint."""
        return {
            "status": "OK",
            "topics": topics.count(),
            "resources": resources.count(),
            "users": users.count(),
        }

    @app.get("/info")
    async def info() -> Dict[str, Any]:
        """API information endpoint."""
        return {
            "name": "Knowledge Base",
            "version": "1.0.0",
            "endpoints": {
                "api": config.api_prefix,
                "docs": "/docs",
                "health": "/health",
            },
        }

    return app


def get_app() -> FastAPI:
    """
    Factory function for uvicorn.

    Usage:
        uvicorn knowledge_base.api_host.server:get_app --factory
    """
    return create_app()
