# app/routers/legal_document.py
"""
Terms & conditions (``/terms``) and privacy policies (``/privacy``) expose the
same endpoints; both routers are built by ``build_router``.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.legal_document import (
    LegalDocumentListResponse,
    LegalDocumentPublish,
    LegalDocumentResponse,
    LegalDocumentWrite,
)
from app.services.legal_document import PRIVACY, TERMS, DocumentKind, LegalDocumentService


def build_router(kind: DocumentKind, prefix: str, tag: str) -> APIRouter:
    router = APIRouter(
        prefix=prefix,
        tags=[tag],
        responses={404: {"description": "Not found"}},
    )

    def get_service(db: Session = Depends(get_db)) -> LegalDocumentService:
        return LegalDocumentService(db, kind)

    @router.get("", response_model=LegalDocumentListResponse)
    def list_documents(
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
        status: Optional[str] = Query(None),
        language: Optional[str] = Query(None),
        sort_by: Optional[str] = Query(None, alias="sortBy"),
        sort_order: Optional[str] = Query(None, alias="sortOrder"),
        service: LegalDocumentService = Depends(get_service),
    ):
        documents, pagination = service.get_documents(
            page, limit, status, language, sort_by, sort_order
        )
        return {"data": documents, "meta": pagination}

    @router.post("", response_model=ApiResponse[LegalDocumentResponse], status_code=201)
    def create_document(
        document_in: LegalDocumentWrite,
        service: LegalDocumentService = Depends(get_service),
    ):
        document = service.create_document(document_in)
        return {"data": document, "message": f"{kind.label} created successfully"}

    @router.get("/{document_id}", response_model=ApiResponse[LegalDocumentResponse])
    def get_document(
        document_id: int, service: LegalDocumentService = Depends(get_service)
    ):
        return {"data": service.get_document(document_id)}

    @router.put("/{document_id}", response_model=ApiResponse[LegalDocumentResponse])
    def update_document(
        document_id: int,
        document_in: LegalDocumentWrite,
        service: LegalDocumentService = Depends(get_service),
    ):
        document = service.update_document(document_id, document_in)
        return {"data": document, "message": f"{kind.label} updated successfully"}

    @router.delete("/{document_id}", response_model=MessageResponse)
    def delete_document(
        document_id: int, service: LegalDocumentService = Depends(get_service)
    ):
        title = service.delete_document(document_id)
        return {"message": f"{kind.label} '{title}' deleted successfully"}

    @router.post(
        "/{document_id}/publish", response_model=ApiResponse[LegalDocumentResponse]
    )
    def publish_document(
        document_id: int,
        publish_in: Optional[LegalDocumentPublish] = Body(None),
        service: LegalDocumentService = Depends(get_service),
    ):
        """
        Make the document Active. Active and Archived documents are rejected.
        """
        document = service.publish_document(document_id, publish_in)
        return {
            "data": document,
            "message": f"{kind.label} '{document.title}' published successfully",
        }

    return router


terms_router = build_router(TERMS, "/terms", "Terms & Conditions")
privacy_router = build_router(PRIVACY, "/privacy", "Privacy Policies")
