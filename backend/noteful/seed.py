"""
Noteful Backend: Seed Data
============================

What:  Sample folders, tags and notes, and a routine that loads them.
How:   `seed_database()` drops and recreates every table, then inserts the
       sample rows in one transaction. Ids are fixed so notes can reference
       folders and tags, and so tests can address known documents.
Who:   The `noteful-seed` console script and the test suite.

Usage:
    DATABASE_URL=postgresql+asyncpg://... noteful-seed
"""

import asyncio
import logging
import uuid
from typing import Dict, List

from noteful.config import settings
from noteful.database import Database
from noteful.models import Folder, Note, Tag

logger = logging.getLogger(__name__)


def _id(n: int) -> uuid.UUID:
    return uuid.UUID(int=n)


SEED_FOLDERS: List[Dict] = [
    {"id": _id(0x100), "name": "Archive"},
    {"id": _id(0x101), "name": "Drafts"},
    {"id": _id(0x102), "name": "Personal"},
    {"id": _id(0x103), "name": "Work"},
]

SEED_TAGS: List[Dict] = [
    {"id": _id(0x200), "name": "breed"},
    {"id": _id(0x201), "name": "hybrid"},
    {"id": _id(0x202), "name": "domestic"},
    {"id": _id(0x203), "name": "feral"},
]

SEED_NOTES: List[Dict] = [
    {
        "id": _id(0x300),
        "title": "5 life lessons learned from cats",
        "content": "Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
        "folder_id": _id(0x100),
        "tags": [_id(0x200)],
    },
    {
        "id": _id(0x301),
        "title": "What the government doesn't want you to know about cats",
        "content": "Posuere sollicitudin aliquam ultrices sagittis orci a.",
        "folder_id": _id(0x100),
        "tags": [_id(0x200), _id(0x201)],
    },
    {
        "id": _id(0x302),
        "title": "The most boring article about cats you'll ever read",
        "content": "Lorem ipsum dolor sit amet, consectetur adipiscing elit.",
        "folder_id": _id(0x101),
        "tags": [_id(0x202)],
    },
    {
        "id": _id(0x303),
        "title": "7 things lady gaga has in common with cats",
        "content": "Aliquet sagittis id consectetur purus ut faucibus.",
        "folder_id": _id(0x102),
        "tags": [],
    },
    {
        "id": _id(0x304),
        "title": "The most incredible article about dogs you'll ever read",
        "content": "Morbi tristique senectus et netus et malesuada fames.",
        "folder_id": None,
        "tags": [_id(0x203)],
    },
]


async def seed_database(database: Database, drop: bool = True) -> Dict[str, int]:
    """
    Reset the schema and insert the sample data.

    Returns:
        Row counts per collection, e.g. {"folders": 4, "tags": 4, "notes": 5}
    """
    if drop:
        await database.drop_all()
    await database.create_all()

    async with database.session() as session:
        folders = [Folder(**row) for row in SEED_FOLDERS]
        tags = {row["id"]: Tag(**row) for row in SEED_TAGS}
        notes = [
            Note(
                id=row["id"],
                title=row["title"],
                content=row["content"],
                folder_id=row["folder_id"],
                tags=[tags[tag_id] for tag_id in row["tags"]],
            )
            for row in SEED_NOTES
        ]
        session.add_all(folders)
        session.add_all(tags.values())
        session.add_all(notes)

    counts = {"folders": len(folders), "tags": len(tags), "notes": len(notes)}
    logger.info("Seeded database: %s", counts)
    return counts


async def _run() -> None:
    database = Database.from_settings(settings)
    try:
        await seed_database(database)
    finally:
        await database.dispose()


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    asyncio.run(_run())


if __name__ == "__main__":
    main()
