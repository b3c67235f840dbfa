# app/models/counters.py
"""
Denormalized ``topics_count`` maintenance.

Category.topics_count follows the number of its subcategories and
Subcategory.topics_count the number of topics filed under it. Both are
adjusted inside the flush that inserts, deletes or re-parents the child row,
so request handlers never write these columns.
"""

import logging

from sqlalchemy import event, inspect, update

from .category import Category
from .subcategory import Subcategory
from .topic import Topic

logger = logging.getLogger(__name__)


def _bump(connection, model, row_id, delta: int) -> None:
    if row_id is None:
        return
    connection.execute(
        update(model)
        .where(model.id == row_id)
        .values(topics_count=model.topics_count + delta)
    )


def _parent_change(target, attr: str):
    history = inspect(target).attrs[attr].history
    if not history.has_changes():
        return None
    old = history.deleted[0] if history.deleted else None
    new = history.added[0] if history.added else None
    return old, new


def _subcategory_inserted(mapper, connection, target):
    _bump(connection, Category, target.category_id, 1)


def _subcategory_deleted(mapper, connection, target):
    _bump(connection, Category, target.category_id, -1)


def _subcategory_updated(mapper, connection, target):
    change = _parent_change(target, "category_id")
    if change:
        old, new = change
        _bump(connection, Category, old, -1)
        _bump(connection, Category, new, 1)


def _topic_inserted(mapper, connection, target):
    _bump(connection, Subcategory, target.subcategory_id, 1)


def _topic_deleted(mapper, connection, target):
    _bump(connection, Subcategory, target.subcategory_id, -1)


def _topic_updated(mapper, connection, target):
    change = _parent_change(target, "subcategory_id")
    if change:
        old, new = change
        _bump(connection, Subcategory, old, -1)
        _bump(connection, Subcategory, new, 1)


def setup_counters():
    """Register the mapper events. Safe to call more than once."""
    listeners = [
        (Subcategory, "after_insert", _subcategory_inserted),
        (Subcategory, "after_delete", _subcategory_deleted),
        (Subcategory, "after_update", _subcategory_updated),
        (Topic, "after_insert", _topic_inserted),
        (Topic, "after_delete", _topic_deleted),
        (Topic, "after_update", _topic_updated),
    ]
    for model, name, fn in listeners:
        if not event.contains(model, name, fn):
            event.listen(model, name, fn)
    logger.debug("topics_count listeners registered")
