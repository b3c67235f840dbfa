# app/services/topic_module.py
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.core.decorator import db_exception
from app.models.topic import Topic
from app.models.topic_module import TopicModule
from app.schemas.topic_module import ModuleCreate, ModuleUpdate
from app.services.duration import DurationService

logger = logging.getLogger(__name__)

# Columns that may not be set to NULL through an update
REQUIRED_MODULE_COLUMNS = {"title", "order_index", "is_active", "duration_minutes"}


class TopicModuleService:
    def __init__(self, db: Session):
        self.db = db

    def _get_topic(self, topic_id: int) -> Topic:
        topic = self.db.query(Topic).filter(Topic.id == topic_id).first()
        if not topic:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Topic not found"
            )
        return topic

    def next_order(self, topic_id: int) -> int:
        current = (
            self.db.query(func.coalesce(func.max(TopicModule.order_index), 0))
            .filter(TopicModule.topic_id == topic_id)
            .scalar()
        )
        return int(current) + 1

    def get_modules(self, topic_id: int) -> List[TopicModule]:
        """Get a topic's modules in display order"""
        self._get_topic(topic_id)
        return (
            self.db.query(TopicModule)
            .filter(TopicModule.topic_id == topic_id)
            .order_by(TopicModule.order_index.asc(), TopicModule.created_at.asc(), TopicModule.id.asc())
            .all()
        )

    def get_module(self, topic_id: int, module_id: int) -> TopicModule:
        """Get a module (with its videos) that belongs to the topic"""
        module = (
            self.db.query(TopicModule)
            .options(selectinload(TopicModule.videos))
            .filter(TopicModule.id == module_id, TopicModule.topic_id == topic_id)
            .first()
        )
        if not module:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Module not found"
            )
        return module

    @db_exception
    def create_module(self, topic_id: int, module_in: ModuleCreate) -> TopicModule:
        """Append a module to a topic"""
        self._get_topic(topic_id)

        title = (module_in.title or "").strip()
        if not title:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Module title is required",
            )

        module = TopicModule(
            topic_id=topic_id,
            title=title,
            description=module_in.description,
            order_index=module_in.order_index or self.next_order(topic_id),
            is_active=True if module_in.is_active is None else module_in.is_active,
            duration_minutes=module_in.duration_minutes or 0,
        )
        self.db.add(module)
        self.db.flush()
        DurationService(self.db).recompute_topic(topic_id)
        self.db.commit()
        self.db.refresh(module)

        logger.info(f"Module {module.id} added to topic {topic_id}")
        return module

    @db_exception
    def update_module(
        self, topic_id: int, module_id: int, module_in: ModuleUpdate
    ) -> TopicModule:
        """Update the allow-listed fields present in the payload"""
        module = self.get_module(topic_id, module_id)

        data = {
            field: value
            for field, value in module_in.model_dump(exclude_unset=True).items()
            if value is not None or field not in REQUIRED_MODULE_COLUMNS
        }
        if not data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid fields to update",
            )
        if "title" in data:
            data["title"] = data["title"].strip()
            if not data["title"]:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Module title is required",
                )

        for field, value in data.items():
            setattr(module, field, value)

        if "duration_minutes" in data:
            DurationService(self.db).recompute_topic(topic_id)

        self.db.commit()
        self.db.refresh(module)
        return module

    @db_exception
    def delete_module(self, topic_id: int, module_id: int) -> bool:
        """Delete a module and its videos"""
        module = self.get_module(topic_id, module_id)

        self.db.delete(module)
        self.db.flush()
        DurationService(self.db).recompute_topic(topic_id)
        self.db.commit()

        logger.info(f"Module {module_id} deleted from topic {topic_id}")
        return True

    @db_exception
    def reorder_modules(self, topic_id: int, module_ids: List[int]) -> int:
        """Set order_index to each module's position in ``module_ids`` (1-based)"""
        if not module_ids:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Array of module IDs is required",
            )
        self._get_topic(topic_id)

        reordered = 0
        for position, module_id in enumerate(module_ids, start=1):
            reordered += (
                self.db.query(TopicModule)
                .filter(TopicModule.id == module_id, TopicModule.topic_id == topic_id)
                .update({TopicModule.order_index: position}, synchronize_session=False)
            )
        self.db.commit()
        return reordered
