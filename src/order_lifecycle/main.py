from __future__ import annotations

import logging
import sys

import uvicorn

from order_lifecycle.adapters.inbound.cli import run_cli
from order_lifecycle.bootstrap import build_usecases
from order_lifecycle.config import Settings


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("usage: order-lifecycle '<json>'")
        return 2

    settings = Settings.from_env()
    _configure_logging(settings)
    return run_cli(build_usecases(settings), argv[0])


def serve() -> None:
    settings = Settings.from_env()
    _configure_logging(settings)
    uvicorn.run(
        "order_lifecycle.asgi:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    raise SystemExit(main())
