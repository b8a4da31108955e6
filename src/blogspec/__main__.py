"""Serve the blog API: ``python -m blogspec [--host H] [--port P]``."""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

import uvicorn

from .api import create_app
from .bootstrap import build_container
from .config import AppConfig
from .logging_config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("blogspec")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blogspec", description="Serve the blog API over HTTP"
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    config = AppConfig.from_env()
    configure_logging(config)
    logger.info("Serving on http://%s:%d", args.host, args.port)
    app = create_app(build_container(config))
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
