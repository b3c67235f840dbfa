# app/services/category.py
import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.category import CATEGORY_STATUSES, Category
from app.models.subcategory import Subcategory
from app.schemas.category import CategoryWrite
from app.utils.pagination import paginate, resolve_sort

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "id": Category.id,
    "name": Category.name,
    "description": Category.description,
    "status": Category.status,
    "topicsCount": Category.topics_count,
    "topics_count": Category.topics_count,
    "createdAt": Category.created_at,
    "created_at": Category.created_at,
    "updatedAt": Category.updated_at,
    "updated_at": Category.updated_at,
}


def normalize_status(value: Optional[str]) -> str:
    """A missing or unknown status becomes ``Active``."""
    return value if value in CATEGORY_STATUSES else "Active"


class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def get_categories(
        self,
        page: int = 1,
        limit: int = 10,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Tuple[List[Category], dict]:
        """Get list of categories with pagination"""
        query = self.db.query(Category).order_by(
            resolve_sort(sort_by, sort_order, SORT_COLUMNS, default="id")
        )
        return paginate(query, page, limit)

    def get_category(self, category_id: int) -> Category:
        """Get a category by ID"""
        category = self.db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found",
            )
        return category

    @db_exception
    def create_category(self, category_in: CategoryWrite) -> Category:
        name, description = self._validate(category_in)

        category = Category(
            name=name,
            description=description,
            status=normalize_status(category_in.status),
        )
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)

        logger.info(f"Category {category.id} '{category.name}' created")
        return category

    @db_exception
    def update_category(self, category_id: int, category_in: CategoryWrite) -> Category:
        name, description = self._validate(category_in)
        category = self.get_category(category_id)

        category.name = name
        category.description = description
        category.status = normalize_status(category_in.status)

        self.db.commit()
        self.db.refresh(category)
        return category

    @db_exception
    def delete_category(self, category_id: int) -> str:
        """Delete a category that has no subcategories; returns its name"""
        category = self.get_category(category_id)

        subcategory_count = (
            self.db.query(func.count(Subcategory.id))
            .filter(Subcategory.category_id == category_id)
            .scalar()
        )
        if subcategory_count:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"Cannot delete category. It has {subcategory_count} subcategories. "
                    "Please delete subcategories first."
                ),
            )

        name = category.name
        self.db.delete(category)
        self.db.commit()

        logger.info(f"Category {category_id} '{name}' deleted")
        return name

    @staticmethod
    def _validate(category_in: CategoryWrite) -> Tuple[str, str]:
        name = (category_in.name or "").strip()
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category name is required",
            )
        description = (category_in.description or "").strip()
        if not description:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category description is required",
            )
        return name, description
