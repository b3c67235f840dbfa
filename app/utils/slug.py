# app/utils/slug.py
import re
from typing import Optional

from sqlalchemy.orm import Session

from app.models.topic import Topic

_INVALID = re.compile(r"[^a-z0-9 -]")
_SPACES = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(title: str) -> str:
    """Lowercase, keep ``[a-z0-9 -]``, hyphenate spaces, squeeze and trim hyphens."""
    slug = _INVALID.sub("", (title or "").lower())
    slug = _SPACES.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def unique_topic_slug(db: Session, title: str, exclude_id: Optional[int] = None) -> str:
    """Return ``slugify(title)``, suffixed ``-1``, ``-2``... until no other topic uses it."""
    base = slugify(title) or "topic"

    candidate = base
    counter = 0
    while _slug_taken(db, candidate, exclude_id):
        counter += 1
        candidate = f"{base}-{counter}"
    return candidate


def _slug_taken(db: Session, slug: str, exclude_id: Optional[int]) -> bool:
    query = db.query(Topic.id).filter(Topic.slug == slug)
    if exclude_id is not None:
        query = query.filter(Topic.id != exclude_id)
    return query.first() is not None
