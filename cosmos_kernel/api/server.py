"""
Run the Cosmos Kernel API with uvicorn.

Usage:
    cosmos-kernel                         # in-memory universe on :8000
    cosmos-kernel --db cosmos.sqlite3     # persist across restarts
"""

import argparse
import logging
from typing import List, Optional

import uvicorn

from cosmos_kernel.api.app import create_app
from cosmos_kernel.logging_config import setup_logging
from cosmos_kernel.models.config import CosmosConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cosmos Kernel API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--db", default=":memory:", help="SQLite file for the saved universe")
    parser.add_argument("--log-level", default="info", choices=LOG_LEVELS)
    parser.add_argument("--log-file", default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level, args.log_file)
    app = create_app(config=CosmosConfig(db_path=args.db))

    logger.info("Starting Cosmos Kernel API: http://%s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
