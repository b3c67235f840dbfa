# app/routers/category.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.category import CategoryListResponse, CategoryResponse, CategoryWrite
from app.schemas.common import ApiResponse, MessageResponse
from app.services.category import CategoryService

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    responses={404: {"description": "Not found"}},
)


# ==================== Category Endpoints ====================


@router.get("", response_model=CategoryListResponse)
def list_categories(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    db: Session = Depends(get_db),
):
    """
    Get list of categories with pagination.
    """
    categories, pagination = CategoryService(db).get_categories(
        page, limit, sort_by, sort_order
    )
    return {"data": categories, "pagination": pagination}


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse])
def get_category(category_id: int, db: Session = Depends(get_db)):
    return {"data": CategoryService(db).get_category(category_id)}


@router.post("", response_model=ApiResponse[CategoryResponse], status_code=201)
def create_category(category_in: CategoryWrite, db: Session = Depends(get_db)):
    """
    Create a new category. A missing or unknown status becomes ``Active``.
    """
    category = CategoryService(db).create_category(category_in)
    return {"data": category, "message": "Category created successfully"}


@router.put("/{category_id}", response_model=ApiResponse[CategoryResponse])
def update_category(
    category_id: int, category_in: CategoryWrite, db: Session = Depends(get_db)
):
    category = CategoryService(db).update_category(category_id, category_in)
    return {"data": category, "message": "Category updated successfully"}


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    """
    Delete a category. Categories that still own subcategories are kept.
    """
    name = CategoryService(db).delete_category(category_id)
    return {"message": f"Category '{name}' deleted successfully"}
