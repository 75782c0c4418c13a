# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Remove expired session rows once and exit."""

from __future__ import annotations

import argparse

from resume_backend.container import Container
from resume_backend.infrastructure.db import Database
from resume_backend.shared.config import DatabaseConfig, load_config
from resume_backend.shared.logging import setup_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Delete expired login sessions")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy URL; defaults to DATABASE_URL",
    )
    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(debug_mode=config.debug_logging)

    database = None
    if args.database_url:
        database = Database(DatabaseConfig(url=args.database_url))
    container = Container(config, database)
    container.database.init()

    try:
        deleted = container.session_sweeper.sweep_once()
    finally:
        container.database.dispose()

    print(f"Deleted {deleted} expired sessions")


if __name__ == "__main__":
    main()
