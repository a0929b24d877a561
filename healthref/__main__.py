"""Entry point for ``python -m healthref``."""

from __future__ import annotations

import argparse

import uvicorn

from healthref.config import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Healthcare Referral API server")
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Bind address (default: {settings.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to listen on (default: {settings.port}, env PORT)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on code changes (development only)",
    )
    args = parser.parse_args()
    uvicorn.run(
        "healthref.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
