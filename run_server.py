#!/usr/bin/env python3
"""
Run the Knowledge Base server.

This script starts the FastAPI application exposing topics, resources and
users over the REST API.

Usage:
    python run_server.py
    python run_server.py --port 8080
    python run_server.py --no-seed

Environment variables (also read from a .env file):
    HOST: Server host (default: 0.0.0.0)
    PORT: Server port (default: 8000)
    API_PREFIX: REST API prefix (default: /api)
    JWT_SECRET / JWT_REFRESH_SECRET: Token signing secrets
    APP_ENV: Set to PROD to skip seeding default users
    LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import logging
import os

import uvicorn
from dotenv import load_dotenv

load_dotenv()

from knowledge_base.api_host import create_app, AppConfig


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run the Knowledge Base server"
    )
    parser.add_argument(
        "--host",
        default=os.getenv("HOST", "0.0.0.0"),
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Do not create the default admin/editor/viewer users"
    )
    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()

    config = AppConfig(host=args.host, port=args.port)
    if args.no_seed:
        config.seed_default_users = False

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("Knowledge Base Server")
    print("=" * 60)
    print(f"Host: {config.host}")
    print(f"Port: {config.port}")
    print(f"API prefix: {config.api_prefix}")
    print(f"Environment: {config.app_env}")
    print(f"Seed default users: {config.seed_default_users}")
    print("=" * 60)
    print()
    print("Endpoints:")
    print(f"  REST API:  http://{config.host}:{config.port}{config.api_prefix}")
    print(f"  Docs:      http://{config.host}:{config.port}/docs")
    print(f"  Health:    http://{config.host}:{config.port}/health")
    print("=" * 60)
    print()

    app = create_app(config)

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
