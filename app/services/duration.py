# app/services/duration.py
import logging
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.topic import Topic
from app.models.topic_module import TopicModule
from app.models.topic_video import TopicVideo

logger = logging.getLogger(__name__)


class DurationService:
    """Keeps module and topic ``duration_minutes`` equal to the sum of their children.

    Module minutes are the floor of total video seconds / 60, topic minutes
    the sum of module minutes. Callers own the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def recompute_module(self, module_id: int) -> int:
        self.db.flush()
        total_seconds = (
            self.db.query(func.coalesce(func.sum(TopicVideo.duration_seconds), 0))
            .filter(TopicVideo.module_id == module_id)
            .scalar()
        )
        minutes = int(total_seconds) // 60
        self.db.query(TopicModule).filter(TopicModule.id == module_id).update(
            {TopicModule.duration_minutes: minutes}, synchronize_session="fetch"
        )
        return minutes

    def recompute_topic(self, topic_id: int) -> int:
        self.db.flush()
        minutes = (
            self.db.query(func.coalesce(func.sum(TopicModule.duration_minutes), 0))
            .filter(TopicModule.topic_id == topic_id)
            .scalar()
        )
        self.db.query(Topic).filter(Topic.id == topic_id).update(
            {Topic.duration_minutes: int(minutes)}, synchronize_session="fetch"
        )
        return int(minutes)

    def recompute_modules(self, topic_id: int, module_ids: Iterable[int]) -> int:
        """Recompute the given modules, then their topic."""
        for module_id in module_ids:
            self.recompute_module(module_id)
        minutes = self.recompute_topic(topic_id)
        logger.debug(f"Topic {topic_id} duration recomputed: {minutes} min")
        return minutes

    def recompute_tree(self, topic_id: int) -> int:
        """Recompute every module of a topic, then the topic itself."""
        self.db.flush()
        module_ids = [
            row.id
            for row in self.db.query(TopicModule.id).filter(
                TopicModule.topic_id == topic_id
            )
        ]
        return self.recompute_modules(topic_id, module_ids)
