"""Process entry point: configure logging and start the HTTP listener.

Usage:
    user-store
    # or
    PORT=8080 python -m src.server
"""

import logging

import uvicorn

from src.config import get_settings


def main() -> None:
    """Run the API with uvicorn until the process is terminated."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
