# app/schemas/homepage.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field

from app.schemas.common import CamelModel

# ==================== Content Upsert ====================


class HeroIn(CamelModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    background_image: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None


class AboutIn(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    features: Optional[List[Any]] = None


class ContactIn(CamelModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[str] = None
    description: Optional[str] = None
    support_email: Optional[str] = None
    sales_email: Optional[str] = None
    social_links: Optional[Dict[str, Any]] = None


class FaqIn(CamelModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    order: Optional[int] = Field(
        None, validation_alias=AliasChoices("order", "orderIndex", "order_index")
    )
    is_active: Optional[bool] = None


class HomepageContentRequest(CamelModel):
    """Every section is optional here; missing fields are reported together
    as ``validationErrors`` by the service."""

    language: Optional[str] = None
    hero: Optional[HeroIn] = None
    about: Optional[AboutIn] = None
    contact: Optional[ContactIn] = None
    faqs: Optional[List[FaqIn]] = None


# ==================== FAQ CRUD ====================


class FaqCreate(FaqIn):
    language: Optional[str] = None


class FaqUpdate(FaqIn):
    pass


# ==================== Responses ====================


class SectionResponse(CamelModel):
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class HeroResponse(SectionResponse):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    background_image: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None


class AboutResponse(SectionResponse):
    title: Optional[str] = None
    content: Optional[str] = None
    image: Optional[str] = None
    features: List[Any] = []


class ContactResponse(SectionResponse):
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[str] = None
    description: Optional[str] = None
    support_email: Optional[str] = None
    sales_email: Optional[str] = None
    social_links: Dict[str, Any] = {}


class FaqResponse(SectionResponse):
    question: str
    answer: str
    order: int
    is_active: bool


class HomepageResponse(CamelModel):
    id: str
    language: str
    hero: Optional[HeroResponse] = None
    about: Optional[AboutResponse] = None
    contact: Optional[ContactResponse] = None
    faqs: List[FaqResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int
