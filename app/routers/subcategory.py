# app/routers/subcategory.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.subcategory import (
    SubcategoryListResponse,
    SubcategoryResponse,
    SubcategoryWrite,
)
from app.services.subcategory import SubcategoryService

router = APIRouter(
    prefix="/subcategories",
    tags=["Subcategories"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=SubcategoryListResponse)
def list_subcategories(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    db: Session = Depends(get_db),
):
    """
    List subcategories together with overall stats and the category options
    used by the admin form.
    """
    service = SubcategoryService(db)
    subcategories, pagination = service.get_subcategories(
        page, limit, status, category_id, sort_by, sort_order
    )
    return {
        "data": subcategories,
        "meta": pagination,
        "stats": service.get_stats(),
        "categories": service.get_category_options(),
        "message": f"Fetched {len(subcategories)} subcategories (page {page})",
    }


@router.get("/{subcategory_id}", response_model=ApiResponse[SubcategoryResponse])
def get_subcategory(subcategory_id: int, db: Session = Depends(get_db)):
    return {"data": SubcategoryService(db).get_subcategory(subcategory_id)}


@router.post("", response_model=ApiResponse[SubcategoryResponse], status_code=201)
def create_subcategory(subcategory_in: SubcategoryWrite, db: Session = Depends(get_db)):
    subcategory = SubcategoryService(db).create_subcategory(subcategory_in)
    return {"data": subcategory, "message": "Subcategory created successfully"}


@router.put("/{subcategory_id}", response_model=ApiResponse[SubcategoryResponse])
def update_subcategory(
    subcategory_id: int,
    subcategory_in: SubcategoryWrite,
    db: Session = Depends(get_db),
):
    subcategory = SubcategoryService(db).update_subcategory(subcategory_id, subcategory_in)
    return {"data": subcategory, "message": "Subcategory updated successfully"}


@router.delete("/{subcategory_id}", response_model=MessageResponse)
def delete_subcategory(subcategory_id: int, db: Session = Depends(get_db)):
    name = SubcategoryService(db).delete_subcategory(subcategory_id)
    return {"message": f"Subcategory '{name}' deleted successfully"}
