# app/routers/topic_actions.py
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse
from app.schemas.topic import (
    ImportResult,
    TopicDetailResponse,
    TopicExportResponse,
    TopicImportRequest,
    TopicResponse,
)
from app.services.topic_actions import TopicActionService

# Included before the topics router so /topics/export is not read as a topic id
router = APIRouter(
    prefix="/topics",
    tags=["Topic Actions"],
    responses={404: {"description": "Not found"}},
)


# ==================== Export / Import ====================


@router.get("/export", response_model=TopicExportResponse)
def export_topics(
    format: str = Query("json"),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Export topics as JSON (default) or as a CSV attachment.
    """
    service = TopicActionService(db)
    rows = service.export_rows(status)

    if format.lower() == "csv":
        return Response(
            content=service.to_csv(rows),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=topics-export.csv"},
        )

    return {
        "data": rows,
        "exported_at": datetime.now(timezone.utc),
        "count": len(rows),
    }


@router.post("/import", response_model=ApiResponse[ImportResult])
def import_topics(request: TopicImportRequest, db: Session = Depends(get_db)):
    """
    Create topics from ``{"topics": [...]}``; each item succeeds or fails alone.
    """
    result = TopicActionService(db).import_topics(request.topics)
    return {
        "data": result,
        "message": f"Import completed: {result['imported']} imported, {result['failed']} failed",
    }


# ==================== Status Actions ====================


@router.post("/{topic_id}/toggle-status", response_model=ApiResponse[TopicResponse])
def toggle_status(topic_id: int, db: Session = Depends(get_db)):
    """Cycle draft → published → archived → draft"""
    return {"data": TopicActionService(db).toggle_status(topic_id)}


@router.post("/{topic_id}/toggle-featured", response_model=ApiResponse[TopicResponse])
def toggle_featured(topic_id: int, db: Session = Depends(get_db)):
    return {"data": TopicActionService(db).toggle_featured(topic_id)}


@router.post("/{topic_id}/publish", response_model=ApiResponse[TopicResponse])
def publish_topic(topic_id: int, db: Session = Depends(get_db)):
    return {
        "data": TopicActionService(db).publish(topic_id),
        "message": "Topic published successfully",
    }


@router.post("/{topic_id}/archive", response_model=ApiResponse[TopicResponse])
def archive_topic(topic_id: int, db: Session = Depends(get_db)):
    return {
        "data": TopicActionService(db).archive(topic_id),
        "message": "Topic archived successfully",
    }


@router.post(
    "/{topic_id}/duplicate",
    response_model=ApiResponse[TopicDetailResponse],
    status_code=201,
)
def duplicate_topic(topic_id: int, db: Session = Depends(get_db)):
    """
    Copy a topic with its modules and videos as a new draft.
    """
    return {"data": TopicActionService(db).duplicate(topic_id)}
