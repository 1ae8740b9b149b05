"""Command-line entry point: ``python -m user_management`` starts the HTTP server."""

import argparse
import logging
from typing import Sequence

from user_management.config import get_settings

logger = logging.getLogger("user_management")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="User management HTTP service")
    parser.add_argument(
        "--host", default=settings.server_host, help="Bind address for the API",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.server_port,
        help=f"Port for the API (default: {settings.server_port})",
    )
    parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes (development)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for CLI usage."""
    import uvicorn

    args = _parse_args(argv)
    settings = get_settings()
    logger.info(f"Starting user management API on {args.host}:{args.port}")
    uvicorn.run(
        "user_management.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        timeout_keep_alive=settings.server_timeout_keep_alive,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
