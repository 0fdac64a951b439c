# start_app.py
"""Load settings and launch the API server."""

from __future__ import annotations

import argparse
import os
import sys

import uvicorn
from dotenv import load_dotenv

import config


def main(argv: list[str] | None = None) -> None:
    """Load settings, apply command line overrides, then start the API."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument(
        "--port", type=int, default=int(os.getenv("PORT", "3030")), help="Port to bind"
    )
    parser.add_argument(
        "--backend",
        choices=[b.value for b in config.StorageBackend],
        help="Override the storage backend from config.json",
    )
    args = parser.parse_args(argv)

    load_dotenv()  # load environment variables from a .env file

    if args.backend:
        os.environ["STORAGE_BACKEND"] = args.backend

    try:
        config.get_settings()  # fail fast on invalid configuration
    except ValueError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        raise SystemExit(2)

    uvicorn.run(
        "kitchen.app.main:app",
        host=args.host,
        port=args.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
