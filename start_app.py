# start_app.py
"""Load settings and launch the till API server."""

from __future__ import annotations

import argparse
import os
import sys

import uvicorn
from dotenv import load_dotenv

import config


def main(argv: list[str] | None = None) -> None:
    """Load ``.env``, validate settings, then start the API."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    args = parser.parse_args(argv)

    load_dotenv()  # load environment variables from a .env file

    config.get_settings.cache_clear()
    settings = config.get_settings()

    try:
        uvicorn.run(
            "till.app.main:app",
            host=args.host,
            port=args.port,
            log_level=settings.log_level.lower(),
        )
    except ModuleNotFoundError as exc:
        missing = exc.name or str(exc)
        print(
            f"Missing dependency: {missing}. Install it with 'pip install {missing}'",
            file=sys.stderr,
        )
        raise SystemExit(1)


if __name__ == "__main__":
    main()
