#!/usr/bin/env python3
"""Script to initialize the database and register an OAuth client"""

import argparse
import asyncio
import sys

from pydantic import ValidationError

from oauth_server.core.config import logger, settings
from oauth_server.core.container import build_services
from oauth_server.models import close_db, init_db
from oauth_server.schemas.oauth import OAuthClientCreate


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Initialize the OAuth server database")
    parser.add_argument("--client-id", help="Register a client with this ID")
    parser.add_argument("--client-secret", help="Secret of the registered client")
    parser.add_argument("--redirect-uri", help="Redirect URI of the registered client")
    parser.add_argument("--name", default=None, help="Display name of the client")
    parser.add_argument("--login-title", default=None, help="Title shown by the login UI")
    parser.add_argument("--disabled", action="store_true", help="Register the client disabled")
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Main initialization function"""
    args = parse_args(argv)
    services = build_services(settings)

    try:
        logger.info("Initializing database...")
        await init_db(services.engine)
        logger.info("✓ Database initialized")

        if args.client_id:
            client_data = OAuthClientCreate(
                client_id=args.client_id,
                client_secret=args.client_secret or "",
                name=args.name or args.client_id,
                redirect_uri=args.redirect_uri or "",
                login_title=args.login_title,
                enabled=not args.disabled,
            )
            client = await services.client_registry.register_client(client_data)
            print("\n✓ OAuth Client registered:")
            print(f"  Client ID: {client.client_id}")
            print(f"  Redirect URI: {client.redirect_uri}")
            print(f"  Enabled: {client.enabled}")

    except (ValidationError, ValueError) as e:
        logger.error(f"Database initialization failed: {e}")
        print(f"\n✗ Error: {e}")
        return 1

    finally:
        await close_db(services.engine)

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
