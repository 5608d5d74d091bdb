"""Keyword-based auto-categorization for new posts."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Final

from sqlalchemy.orm import Session

from loop_forum.core.errors import ConfigurationError
from loop_forum.models import Category

logger = logging.getLogger(__name__)

# Evaluation order matters: on equal scores the earlier category wins.
DEFAULT_CATEGORY_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    "travel": (
        "travel", "trip", "vacation", "destination", "flight", "hotel", "backpack",
        "tourist", "visa", "airport", "beach", "mountain", "adventure", "explore",
        "country", "city", "abroad",
    ),
    "technology": (
        "tech", "programming", "code", "software", "hardware", "app", "api",
        "developer", "javascript", "python", "react", "database", "ai",
        "machine learning", "computer", "web", "mobile", "cloud", "security",
        "crypto", "blockchain",
    ),
    "career": (
        "job", "career", "salary", "interview", "resume", "hire", "workplace",
        "promotion", "manager", "remote work", "freelance", "negotiate",
        "profession", "employment", "skills",
    ),
    "movie": (
        "movie", "film", "cinema", "actor", "director", "watch", "netflix",
        "streaming", "series", "tv show", "oscar", "review", "blockbuster",
        "scene", "plot", "character",
    ),
    "news": (
        "news", "politics", "government", "election", "economy", "market", "world",
        "breaking", "current events", "policy", "law", "climate", "crisis",
    ),
}


class KeywordCategorizer:
    """Score free text against per-category keyword tables.

    The keyword table is plain configuration; swapping it does not change the
    scoring rule. Matching is case-insensitive substring search over
    ``title + " " + content``.

    Usage:
        categorizer = KeywordCategorizer(DEFAULT_CATEGORY_KEYWORDS, "general")
        slug = categorizer.categorize("Best beaches", "Where to go this summer")
    """

    def __init__(
        self,
        keywords: Mapping[str, Sequence[str]],
        default_slug: str,
    ) -> None:
        # Duplicate keywords inside one category count once.
        self.keywords: dict[str, tuple[str, ...]] = {
            slug: tuple(dict.fromkeys(word.lower() for word in words))
            for slug, words in keywords.items()
        }
        self.default_slug = default_slug

    def score(self, title: str, content: str) -> dict[str, int]:
        """Return the number of distinct keyword hits per category."""
        text = f"{title} {content}".lower()
        return {
            slug: sum(1 for word in words if word in text)
            for slug, words in self.keywords.items()
        }

    def categorize(self, title: str, content: str) -> str:
        """Return the slug of the best-scoring category, or the default."""
        best_slug = self.default_slug
        best_score = 0
        for slug, score in self.score(title, content).items():
            if score > best_score:
                best_slug = slug
                best_score = score
        return best_slug


def resolve_category(db: Session, slug: str, default_slug: str) -> Category:
    """Load the category for ``slug``, falling back to ``default_slug``.

    Raises:
        ConfigurationError: If neither category exists.
    """
    category = db.query(Category).filter(Category.slug == slug).first()
    if category is not None:
        return category

    if slug != default_slug:
        logger.warning("Category %r missing, falling back to %r", slug, default_slug)
        category = db.query(Category).filter(Category.slug == default_slug).first()
        if category is not None:
            return category

    raise ConfigurationError(f"Default category {default_slug!r} is not configured")
