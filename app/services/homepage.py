# app/services/homepage.py
import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.core.decorator import db_exception
from app.models.homepage import (
    Homepage,
    HomepageAbout,
    HomepageContact,
    HomepageFaq,
    HomepageHero,
)
from app.schemas.homepage import FaqCreate, FaqUpdate, HomepageContentRequest
from app.utils.email import is_valid_email

logger = logging.getLogger(__name__)


def prefixed_id(prefix: str, row_id: Optional[int]) -> Optional[str]:
    """``prefixed_id("faq", 3)`` → ``"faq_003"``."""
    if row_id is None:
        return None
    return f"{prefix}_{row_id:03d}"


def parse_faq_id(raw: str) -> int:
    """Accept a numeric id or the prefixed form returned by the API (``faq_003``)."""
    text = raw[len("faq_"):] if raw.startswith("faq_") else raw
    if not text.isdigit() or int(text) < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid FAQ ID is required",
        )
    return int(text)


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


# ==================== Formatting ====================


def format_faq(faq: HomepageFaq) -> dict:
    return {
        "id": prefixed_id("faq", faq.id),
        "question": faq.question,
        "answer": faq.answer,
        "order": faq.order_index,
        "is_active": faq.is_active,
        "created_at": faq.created_at,
        "updated_at": faq.updated_at,
    }


def format_homepage(homepage: Homepage, active_faqs_only: bool = True) -> dict:
    """Shape a homepage and its sections for the API, with prefixed ids"""
    hero, about, contact = homepage.hero, homepage.about, homepage.contact
    faqs = [faq for faq in homepage.faqs if faq.is_active or not active_faqs_only]

    return {
        "id": f"homepage_{homepage.language}_{homepage.id:03d}",
        "language": homepage.language,
        "hero": hero
        and {
            "id": prefixed_id("hero", hero.id),
            "title": hero.title,
            "subtitle": hero.subtitle,
            "background_image": hero.background_image,
            "cta_text": hero.cta_text,
            "cta_link": hero.cta_link,
            "created_at": hero.created_at,
            "updated_at": hero.updated_at,
        },
        "about": about
        and {
            "id": prefixed_id("about", about.id),
            "title": about.title,
            "content": about.content,
            "image": about.image,
            "features": about.features or [],
            "created_at": about.created_at,
            "updated_at": about.updated_at,
        },
        "contact": contact
        and {
            "id": prefixed_id("contact", contact.id),
            "email": contact.email,
            "phone": contact.phone,
            "address": contact.address,
            "hours": contact.hours,
            "description": contact.description,
            "support_email": contact.support_email,
            "sales_email": contact.sales_email,
            "social_links": contact.social_links or {},
            "created_at": contact.created_at,
            "updated_at": contact.updated_at,
        },
        "faqs": [format_faq(faq) for faq in faqs],
        "created_at": homepage.created_at,
        "updated_at": homepage.updated_at,
        "version": homepage.version,
    }


class HomepageService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Homepage).options(
            selectinload(Homepage.hero),
            selectinload(Homepage.about),
            selectinload(Homepage.contact),
            selectinload(Homepage.faqs),
        )

    def get_homepage(self, language: str) -> Homepage:
        """Get the active homepage for a language"""
        homepage = (
            self._query()
            .filter(Homepage.language == language, Homepage.is_active.is_(True))
            .first()
        )
        if not homepage:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Homepage content not found for the specified language",
            )
        return homepage

    # ==================== Content Upsert ====================

    @staticmethod
    def validate_content(content_in: HomepageContentRequest) -> List[dict]:
        """Collect every missing/invalid field instead of stopping at the first"""
        hero, about, contact = content_in.hero, content_in.about, content_in.contact
        errors = []

        def require(field: str, value: Optional[str], message: str) -> None:
            if _blank(value):
                errors.append({"field": field, "message": message, "code": "REQUIRED"})

        require("language", content_in.language, "Language is required")
        require("hero.title", hero and hero.title, "Hero title is required")
        require("hero.subtitle", hero and hero.subtitle, "Hero subtitle is required")
        require("about.title", about and about.title, "About title is required")
        require("about.content", about and about.content, "About content is required")
        require("contact.email", contact and contact.email, "Contact email is required")

        if contact and contact.email and not is_valid_email(contact.email.strip()):
            errors.append(
                {
                    "field": "contact.email",
                    "message": "Invalid email format",
                    "code": "INVALID_FORMAT",
                }
            )
        return errors

    @db_exception
    def upsert_content(self, content_in: HomepageContentRequest) -> Tuple[Homepage, bool]:
        """Create or replace a language's homepage; returns ``(homepage, created)``"""
        errors = self.validate_content(content_in)
        if errors:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "Validation failed",
                    "details": "Required fields are missing or invalid",
                    "validationErrors": errors,
                },
            )

        language = content_in.language.strip()
        hero, about, contact = content_in.hero, content_in.about, content_in.contact

        homepage = self._query().filter(Homepage.language == language).first()
        created = homepage is None
        if created:
            homepage = Homepage(language=language, version=1, is_active=True)
            self.db.add(homepage)
        else:
            homepage.version = (homepage.version or 0) + 1

        homepage.hero = homepage.hero or HomepageHero()
        homepage.hero.title = hero.title.strip()
        homepage.hero.subtitle = hero.subtitle.strip()
        homepage.hero.background_image = hero.background_image
        homepage.hero.cta_text = hero.cta_text
        homepage.hero.cta_link = hero.cta_link

        homepage.about = homepage.about or HomepageAbout()
        homepage.about.title = about.title.strip()
        homepage.about.content = about.content.strip()
        homepage.about.image = about.image
        homepage.about.features = about.features or []

        homepage.contact = homepage.contact or HomepageContact()
        homepage.contact.email = contact.email.strip()
        homepage.contact.phone = contact.phone
        homepage.contact.address = contact.address
        homepage.contact.hours = contact.hours
        homepage.contact.description = contact.description
        homepage.contact.support_email = contact.support_email
        homepage.contact.sales_email = contact.sales_email
        homepage.contact.social_links = contact.social_links or {}

        if content_in.faqs is not None:
            homepage.faqs = [
                HomepageFaq(
                    question=faq.question.strip(),
                    answer=faq.answer.strip(),
                    order_index=faq.order or index + 1,
                    is_active=True if faq.is_active is None else faq.is_active,
                )
                for index, faq in enumerate(content_in.faqs)
                if not _blank(faq.question) and not _blank(faq.answer)
            ]

        self.db.commit()
        logger.info(
            f"Homepage '{language}' {'created' if created else 'updated'} "
            f"(version {homepage.version})"
        )

        self.db.expire_all()
        return self._query().filter(Homepage.id == homepage.id).one(), created

    # ==================== FAQs ====================

    def _get_faq(self, faq_id: int) -> HomepageFaq:
        faq = self.db.query(HomepageFaq).filter(HomepageFaq.id == faq_id).first()
        if not faq:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="FAQ not found"
            )
        return faq

    @db_exception
    def create_faq(self, faq_in: FaqCreate) -> HomepageFaq:
        for value, message in (
            (faq_in.language, "Language is required"),
            (faq_in.question, "Question is required"),
            (faq_in.answer, "Answer is required"),
        ):
            if _blank(value):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail=message
                )

        homepage = (
            self.db.query(Homepage)
            .filter(Homepage.language == faq_in.language.strip())
            .first()
        )
        if not homepage:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Homepage not found for the specified language",
            )

        order = faq_in.order
        if not order:
            current = (
                self.db.query(func.coalesce(func.max(HomepageFaq.order_index), 0))
                .filter(HomepageFaq.homepage_id == homepage.id)
                .scalar()
            )
            order = int(current) + 1

        faq = HomepageFaq(
            homepage_id=homepage.id,
            question=faq_in.question.strip(),
            answer=faq_in.answer.strip(),
            order_index=order,
            is_active=True if faq_in.is_active is None else faq_in.is_active,
        )
        self.db.add(faq)
        self.db.commit()
        self.db.refresh(faq)
        return faq

    @db_exception
    def update_faq(self, faq_id: int, faq_in: FaqUpdate) -> HomepageFaq:
        faq = self._get_faq(faq_id)

        data = {}
        if not _blank(faq_in.question):
            data["question"] = faq_in.question.strip()
        if not _blank(faq_in.answer):
            data["answer"] = faq_in.answer.strip()
        if faq_in.order is not None:
            data["order_index"] = faq_in.order
        if faq_in.is_active is not None:
            data["is_active"] = faq_in.is_active

        if not data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid fields to update",
            )

        for field, value in data.items():
            setattr(faq, field, value)
        self.db.commit()
        self.db.refresh(faq)
        return faq

    @db_exception
    def delete_faq(self, faq_id: int) -> bool:
        faq = self._get_faq(faq_id)
        self.db.delete(faq)
        self.db.commit()
        return True

    @db_exception
    def ensure_default(self, language: str = "en") -> Optional[Homepage]:
        """Seed placeholder content for ``language`` when no homepage exists"""
        if self.db.query(Homepage.id).first():
            return None

        homepage = Homepage(
            language=language,
            version=1,
            is_active=True,
            hero=HomepageHero(
                title="Learn cybersecurity, one topic at a time",
                subtitle="Hands-on modules and videos for every level",
            ),
            about=HomepageAbout(
                title="About us",
                content="We publish practical courses curated by practitioners.",
                features=[],
            ),
            contact=HomepageContact(email="info@example.com", social_links={}),
        )
        self.db.add(homepage)
        self.db.commit()
        logger.info(f"Default '{language}' homepage created")
        return homepage
