"""Entry point for the Pizza Storefront API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as the data file, upload directory, admin
credentials and the token secret is read from environment variables
(see ``pizza_api/app/core/config.py``).

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from pizza_api.app.main import app


def build_config() -> Config:
    """Build the Uvicorn config.

    Host and port are read from environment variables ``HOST`` and
    ``PORT``.  Defaults are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    log_level = os.getenv("LOG_LEVEL", "info").lower()
    return Config(app=app, host=host, port=port, reload=False, log_level=log_level)


async def main() -> None:
    server = Server(build_config())
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
