#!/usr/bin/env python3
"""Seed the genres table from TMDB's official movie genre list.

Genre names are stored in the configured TMDB language (TMDB_LANGUAGE) so
they line up with what auto-fill returns for each film.

Usage:
    python scripts/sync_genres.py [--dry-run]

Options:
    --dry-run   Show what would be created without making changes
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cinedesk.db.crud import get_or_create_genre, list_genres
from cinedesk.db.database import async_session_maker, init_db
from cinedesk.services.metadata.tmdb import TMDBError, TMDBService
from cinedesk.utils.http_client import close_all_clients


async def sync_genres(dry_run: bool = False) -> None:
    service = TMDBService()
    try:
        tmdb_genres = await service.get_movie_genres()
    except TMDBError as e:
        print(f"TMDB error: {e}")
        return
    finally:
        await close_all_clients()

    print(f"TMDB returned {len(tmdb_genres)} genres ({service.language})\n")

    await init_db()
    async with async_session_maker() as db:
        existing = {genre.name for genre in await list_genres(db)}
        created = []

        for tmdb_genre in tmdb_genres:
            if tmdb_genre.name in existing:
                continue
            if not dry_run:
                await get_or_create_genre(db, tmdb_genre.name)
            created.append(tmdb_genre.name)

        if not dry_run:
            await db.commit()

    print(f"{'[DRY RUN] ' if dry_run else ''}Created: {len(created)}")
    for name in created:
        print(f"  + {name}")
    print(f"Already present: {len(tmdb_genres) - len(created)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed genres from TMDB")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be done without changes")
    args = parser.parse_args()

    asyncio.run(sync_genres(dry_run=args.dry_run))
