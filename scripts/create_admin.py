#!/usr/bin/env python3
"""Create an admin account and print its access token.

The token is shown once; only its SHA-256 hash is stored.

Usage:
    python scripts/create_admin.py EMAIL [--name="Display Name"] [--token=TOKEN]

Options:
    --name    Display name shown in the admin header
    --token   Use this token instead of generating one
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cinedesk.db.crud import create_admin, get_admin_by_email
from cinedesk.db.database import async_session_maker, init_db
from cinedesk.utils.security import generate_secure_key


async def main(email: str, name: str | None, token: str | None) -> int:
    await init_db()

    async with async_session_maker() as db:
        if await get_admin_by_email(db, email):
            print(f"An admin with email {email} already exists.")
            return 1

        token = token or generate_secure_key()
        admin = await create_admin(db, email, token, display_name=name)

    print(f"Admin #{admin.id} created for {admin.email}")
    print(f"Access token (store it now, it will not be shown again):\n\n  {token}\n")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a CineDesk admin account")
    parser.add_argument("email", help="Admin email address")
    parser.add_argument("--name", help="Display name")
    parser.add_argument("--token", help="Explicit token (at least 32 characters)")
    args = parser.parse_args()

    if args.token and len(args.token) < 32:
        parser.error("--token must be at least 32 characters long")

    sys.exit(asyncio.run(main(args.email, args.name, args.token)))
