"""Seed data for the fixed category taxonomy."""

from __future__ import annotations

import logging
from typing import Final

from sqlalchemy.orm import Session

from loop_forum.models import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: Final[tuple[dict[str, str], ...]] = (
    {
        "name": "Travel",
        "slug": "travel",
        "icon": "🌍",
        "description": "Travel tips, destinations, and experiences",
    },
    {
        "name": "Technology",
        "slug": "technology",
        "icon": "💻",
        "description": "Tech news, programming, and gadgets",
    },
    {
        "name": "Career",
        "slug": "career",
        "icon": "💼",
        "description": "Job advice and professional development",
    },
    {
        "name": "Movie",
        "slug": "movie",
        "icon": "🎬",
        "description": "Film discussions, reviews, and recommendations",
    },
    {
        "name": "News",
        "slug": "news",
        "icon": "📰",
        "description": "Current events and world news",
    },
    {
        "name": "General",
        "slug": "general",
        "icon": "💬",
        "description": "Everything else",
    },
)


def seed_categories(db: Session) -> int:
    """Insert any missing default categories.

    Existing rows are left untouched, so the function is safe to run on every
    startup.

    Returns:
        Number of categories inserted.
    """
    existing = {slug for (slug,) in db.query(Category.slug).all()}
    created = 0
    for entry in DEFAULT_CATEGORIES:
        if entry["slug"] in existing:
            continue
        db.add(Category(**entry))
        created += 1

    if created:
        db.commit()
        logger.info("Seeded %d categories", created)
    return created
