#!/usr/bin/env python3
"""
Create the database tables and, optionally, a user account.

Usage:
    uv run python -m scripts.init_db
    uv run python -m scripts.init_db --email owner@example.com --password change-me
"""

import argparse
import logging

from tenacity import retry, stop_after_attempt, wait_fixed

from database.database import engine
from database.models import Base

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2))
def init_db():
    logger.info("Initializing database...")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tables created or verified.")
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


def main():
    parser = argparse.ArgumentParser(description="Initialize the Ytheys database")
    parser.add_argument("--email", help="Create a user with this email")
    parser.add_argument("--password", help="Password for the new user")
    parser.add_argument("--name", help="Display name for the new user")
    args = parser.parse_args()

    init_db()

    if args.email:
        if not args.password:
            parser.error("--password is required with --email")

        from core.config_loader import load_config
        from web.backend.services.auth_service import AuthService

        user_id = AuthService(load_config().auth).create_user(args.email, args.password, display_name=args.name)
        logger.info(f"Created user {args.email} ({user_id})")


if __name__ == "__main__":
    main()
