# app/services/legal_document.py
"""
Terms & conditions and privacy policies share one lifecycle:
Draft/Inactive → Active on publish; Archived documents stay archived.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple, Type

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.legal_document import (
    DOCUMENT_STATUSES,
    LegalDocumentMixin,
    PrivacyPolicy,
    TermsCondition,
)
from app.schemas.legal_document import LegalDocumentPublish, LegalDocumentWrite
from app.utils.pagination import paginate, resolve_sort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentKind:
    model: Type[LegalDocumentMixin]
    label: str  # sentence-case name used in messages
    verb: str  # "is" / "are", to agree with the label

    @property
    def lower_label(self) -> str:
        return self.label[0].lower() + self.label[1:]


TERMS = DocumentKind(TermsCondition, "Terms and conditions", "are")
PRIVACY = DocumentKind(PrivacyPolicy, "Privacy policy", "is")


def _sort_columns(model) -> dict:
    return {
        "id": model.id,
        "title": model.title,
        "version": model.version,
        "language": model.language,
        "status": model.status,
        "effectiveDate": model.effective_date,
        "effective_date": model.effective_date,
        "createdAt": model.created_at,
        "created_at": model.created_at,
        "updatedAt": model.updated_at,
        "updated_at": model.updated_at,
    }


def _text_or(value: Optional[str], default: str) -> str:
    return value.strip() if value and value.strip() else default


class LegalDocumentService:
    def __init__(self, db: Session, kind: DocumentKind):
        self.db = db
        self.kind = kind
        self.model = kind.model

    def get_documents(
        self,
        page: int = 1,
        limit: int = 10,
        status_filter: Optional[str] = None,
        language: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Tuple[List[LegalDocumentMixin], dict]:
        query = self.db.query(self.model)
        if status_filter:
            query = query.filter(self.model.status == status_filter)
        if language:
            query = query.filter(self.model.language == language)

        query = query.order_by(
            resolve_sort(sort_by, sort_order, _sort_columns(self.model), default="id")
        )
        return paginate(query, page, limit)

    def get_document(self, document_id: int) -> LegalDocumentMixin:
        document = (
            self.db.query(self.model).filter(self.model.id == document_id).first()
        )
        if not document:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.kind.label} not found",
            )
        return document

    @db_exception
    def create_document(self, document_in: LegalDocumentWrite) -> LegalDocumentMixin:
        title, content, version = self._validate(document_in)
        created_by = _text_or(document_in.created_by, "admin")

        document = self.model(
            title=title,
            content=content,
            version=version,
            language=_text_or(document_in.language, "en"),
            status=self._status(document_in.status),
            effective_date=document_in.effective_date,
            created_by=created_by,
            updated_by=created_by,
        )
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)

        logger.info(f"{self.kind.label} {document.id} (v{version}) created")
        return document

    @db_exception
    def update_document(
        self, document_id: int, document_in: LegalDocumentWrite
    ) -> LegalDocumentMixin:
        title, content, version = self._validate(document_in)
        document = self.get_document(document_id)

        document.title = title
        document.content = content
        document.version = version
        document.language = _text_or(document_in.language, "en")
        document.status = self._status(document_in.status)
        document.effective_date = document_in.effective_date
        document.updated_by = _text_or(document_in.updated_by, "admin")

        self.db.commit()
        self.db.refresh(document)
        return document

    @db_exception
    def delete_document(self, document_id: int) -> str:
        """Delete a document; returns its title"""
        document = self.get_document(document_id)

        title = document.title
        self.db.delete(document)
        self.db.commit()

        logger.info(f"{self.kind.label} {document_id} deleted")
        return title

    @db_exception
    def publish_document(
        self, document_id: int, publish_in: Optional[LegalDocumentPublish] = None
    ) -> LegalDocumentMixin:
        """Make a document Active from the given (or today's) effective date"""
        publish_in = publish_in or LegalDocumentPublish()
        document = self.get_document(document_id)

        if document.status == "Active":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{self.kind.label} {self.kind.verb} already active/published",
            )
        if document.status == "Archived":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Archived {self.kind.lower_label} cannot be published",
            )

        document.status = "Active"
        document.effective_date = publish_in.effective_date or date.today()
        document.updated_by = _text_or(publish_in.published_by, "admin")

        self.db.commit()
        self.db.refresh(document)

        logger.info(f"{self.kind.label} {document_id} published")
        return document

    @staticmethod
    def _status(value: Optional[str]) -> str:
        return value if value in DOCUMENT_STATUSES else "Draft"

    @staticmethod
    def _validate(document_in: LegalDocumentWrite) -> Tuple[str, str, str]:
        values = []
        for value, message in (
            (document_in.title, "Title is required"),
            (document_in.content, "Content is required"),
            (document_in.version, "Version is required"),
        ):
            if not value or not value.strip():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail=message
                )
            values.append(value.strip())
        return tuple(values)
