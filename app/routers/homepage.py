# app/routers/homepage.py
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, DeletedData
from app.schemas.homepage import (
    FaqCreate,
    FaqResponse,
    FaqUpdate,
    HomepageContentRequest,
    HomepageResponse,
)
from app.services.homepage import (
    HomepageService,
    format_faq,
    format_homepage,
    parse_faq_id,
)

router = APIRouter(
    prefix="/homepage",
    tags=["Homepage"],
    responses={404: {"description": "Not found"}},
)


# ==================== Content ====================


@router.post("/content", response_model=ApiResponse[HomepageResponse])
def upsert_homepage_content(
    content_in: HomepageContentRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Create or replace the homepage for ``language``.
    Returns 201 when created and 200 when an existing homepage was updated.
    """
    homepage, created = HomepageService(db).upsert_content(content_in)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return {"data": format_homepage(homepage, active_faqs_only=False)}


@router.get("/{language}", response_model=ApiResponse[HomepageResponse])
def get_homepage(language: str, db: Session = Depends(get_db)):
    homepage = HomepageService(db).get_homepage(language)
    return {"data": format_homepage(homepage)}


# ==================== FAQs ====================


@router.post("/faqs", response_model=ApiResponse[FaqResponse], status_code=201)
def create_faq(faq_in: FaqCreate, db: Session = Depends(get_db)):
    faq = HomepageService(db).create_faq(faq_in)
    return {"data": format_faq(faq)}


@router.put("/faqs/{faq_id}", response_model=ApiResponse[FaqResponse])
def update_faq(faq_id: str, faq_in: FaqUpdate, db: Session = Depends(get_db)):
    faq = HomepageService(db).update_faq(parse_faq_id(faq_id), faq_in)
    return {"data": format_faq(faq)}


@router.delete("/faqs/{faq_id}", response_model=ApiResponse[DeletedData])
def delete_faq(faq_id: str, db: Session = Depends(get_db)):
    HomepageService(db).delete_faq(parse_faq_id(faq_id))
    return {"data": {"deleted": True}}
