# app/services/subcategory.py
import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.category import Category
from app.models.subcategory import Subcategory
from app.schemas.subcategory import SubcategoryWrite
from app.services.category import normalize_status
from app.utils.pagination import paginate, resolve_sort

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Subcategory description"

SORT_COLUMNS = {
    "id": Subcategory.id,
    "name": Subcategory.name,
    "categoryId": Subcategory.category_id,
    "category_id": Subcategory.category_id,
    "createdAt": Subcategory.created_at,
    "created_at": Subcategory.created_at,
}


class SubcategoryService:
    def __init__(self, db: Session):
        self.db = db

    def get_subcategories(
        self,
        page: int = 1,
        limit: int = 10,
        status_filter: Optional[str] = None,
        category_id: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Tuple[List[Subcategory], dict]:
        """Get subcategories with filters and pagination"""
        query = self.db.query(Subcategory)
        if status_filter:
            query = query.filter(Subcategory.status == status_filter)
        if category_id is not None:
            query = query.filter(Subcategory.category_id == category_id)

        query = query.order_by(
            resolve_sort(sort_by, sort_order, SORT_COLUMNS, default="id")
        )
        return paginate(query, page, limit)

    def get_stats(self) -> dict:
        """Totals over every subcategory, regardless of list filters"""
        row = self.db.query(
            func.count(Subcategory.id).label("total"),
            func.sum(case((Subcategory.status == "Active", 1), else_=0)).label("active"),
            func.sum(case((Subcategory.status == "Draft", 1), else_=0)).label("draft"),
            func.sum(case((Subcategory.status == "Inactive", 1), else_=0)).label("inactive"),
            func.coalesce(func.sum(Subcategory.topics_count), 0).label("total_topics"),
            func.count(func.distinct(Subcategory.category_id)).label("categories_used"),
        ).one()

        total = int(row.total or 0)
        total_topics = int(row.total_topics or 0)
        average = f"{total_topics / total:.1f}" if total else "0.0"
        return {
            "total": total,
            "active": int(row.active or 0),
            "draft": int(row.draft or 0),
            "inactive": int(row.inactive or 0),
            "total_topics": total_topics,
            "average_topics_per_subcategory": average,
            "categories_used": int(row.categories_used or 0),
        }

    def get_category_options(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name.asc(), Category.id.asc()).all()

    def get_subcategory(self, subcategory_id: int) -> Subcategory:
        subcategory = (
            self.db.query(Subcategory).filter(Subcategory.id == subcategory_id).first()
        )
        if not subcategory:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Subcategory not found",
            )
        return subcategory

    @db_exception
    def create_subcategory(self, subcategory_in: SubcategoryWrite) -> Subcategory:
        name, category_id = self._validate(subcategory_in)

        subcategory = Subcategory(
            name=name,
            category_id=category_id,
            description=(subcategory_in.description or "").strip() or DEFAULT_DESCRIPTION,
            status=normalize_status(subcategory_in.status),
        )
        self.db.add(subcategory)
        self.db.commit()
        self.db.refresh(subcategory)

        logger.info(f"Subcategory {subcategory.id} '{name}' created in category {category_id}")
        return subcategory

    @db_exception
    def update_subcategory(
        self, subcategory_id: int, subcategory_in: SubcategoryWrite
    ) -> Subcategory:
        name, category_id = self._validate(subcategory_in)
        subcategory = self.get_subcategory(subcategory_id)

        subcategory.name = name
        subcategory.category_id = category_id
        subcategory.description = (
            (subcategory_in.description or "").strip() or DEFAULT_DESCRIPTION
        )
        subcategory.status = normalize_status(subcategory_in.status)

        self.db.commit()
        self.db.refresh(subcategory)
        return subcategory

    @db_exception
    def delete_subcategory(self, subcategory_id: int) -> str:
        """Delete a subcategory; returns its name"""
        subcategory = self.get_subcategory(subcategory_id)

        name = subcategory.name
        self.db.delete(subcategory)
        self.db.commit()

        logger.info(f"Subcategory {subcategory_id} '{name}' deleted")
        return name

    def _validate(self, subcategory_in: SubcategoryWrite) -> Tuple[str, int]:
        name = (subcategory_in.name or "").strip()
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Subcategory name is required",
            )
        if subcategory_in.category_id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category ID is required",
            )
        exists = (
            self.db.query(Category.id)
            .filter(Category.id == subcategory_in.category_id)
            .first()
        )
        if not exists:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category not found",
            )
        return name, subcategory_in.category_id
