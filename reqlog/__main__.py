from __future__ import annotations

import argparse

import uvicorn

from reqlog.config import get_settings
from reqlog.observability.logging import configure_logging
from reqlog.observability.loggers import get_base_logger


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="reqlog demo service")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--log-level", default=settings.log_level, help="Root log level (e.g. INFO, DEBUG)")
    args = parser.parse_args()

    configure_logging(level=args.log_level.upper(), json=settings.log_json)
    get_base_logger().info("server starting", host=args.host, port=args.port)

    # log_config=None keeps uvicorn from replacing our handlers.
    uvicorn.run("reqlog.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
