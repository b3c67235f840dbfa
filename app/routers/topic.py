# app/routers/topic.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, DeletedData
from app.schemas.topic import (
    BulkDeleteData,
    TopicBulkDeleteRequest,
    TopicCounts,
    TopicDetailResponse,
    TopicListItem,
    TopicListResponse,
    TopicWrite,
)
from app.services.topic import TopicService, parse_flag

router = APIRouter(
    prefix="/topics",
    tags=["Topics"],
    responses={404: {"description": "Not found"}},
)


def _listing(topics, pagination) -> dict:
    return {"data": topics, "pagination": TopicService.topic_pagination(pagination)}


# ==================== Topic Listing ====================


@router.get("", response_model=TopicListResponse)
def list_topics(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[str] = Query(None),
    difficulty: Optional[str] = Query(None),
    category: Optional[int] = Query(None),
    subcategory: Optional[int] = Query(None),
    featured: Optional[str] = Query(None),
    free: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    db: Session = Depends(get_db),
):
    """
    List topics with filters. ``featured``/``free`` take ``true``/``false``.
    """
    topics, pagination = TopicService(db).get_topics(
        page=page,
        limit=limit,
        status_filter=status,
        difficulty=difficulty,
        category_id=category,
        subcategory_id=subcategory,
        featured=parse_flag(featured),
        free=parse_flag(free),
        search=search,
        tag=tag,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return _listing(topics, pagination)


@router.get("/search", response_model=TopicListResponse)
def search_topics(
    q: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Search published topics by title, description and content"""
    return _listing(*TopicService(db).search_topics(q, page, limit))


@router.get("/list", response_model=ApiResponse[List[TopicListItem]])
def list_topic_titles(
    status: str = Query("published"),
    db: Session = Depends(get_db),
):
    return {"data": TopicService(db).list_titles(status)}


@router.get("/count", response_model=ApiResponse[TopicCounts])
def count_topics(db: Session = Depends(get_db)):
    return {"data": TopicService(db).count_topics()}


@router.get("/published", response_model=TopicListResponse)
def list_published_topics(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(
        *TopicService(db).get_topics(
            page=page, limit=limit, status_filter="published", sort_by="publishedAt"
        )
    )


@router.get("/draft", response_model=TopicListResponse)
def list_draft_topics(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(
        *TopicService(db).get_topics(
            page=page, limit=limit, status_filter="draft", sort_by="updatedAt"
        )
    )


@router.get("/featured", response_model=TopicListResponse)
def list_featured_topics(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(
        *TopicService(db).get_topics(
            page=page, limit=limit, status_filter="published", featured=True
        )
    )


@router.get("/free", response_model=TopicListResponse)
def list_free_topics(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(
        *TopicService(db).get_topics(
            page=page, limit=limit, status_filter="published", free=True
        )
    )


@router.get("/paid", response_model=TopicListResponse)
def list_paid_topics(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(
        *TopicService(db).get_topics(
            page=page, limit=limit, status_filter="published", free=False
        )
    )


@router.get("/difficulty/{level}", response_model=TopicListResponse)
def list_topics_by_difficulty(
    level: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(*TopicService(db).get_by_difficulty(level, page, limit))


@router.get("/tag/{tag}", response_model=TopicListResponse)
def list_topics_by_tag(
    tag: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return _listing(
        *TopicService(db).get_topics(
            page=page, limit=limit, status_filter="published", tag=tag
        )
    )


@router.get("/category/{category_id}", response_model=TopicListResponse)
def list_topics_by_category(
    category_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: str = Query("published"),
    db: Session = Depends(get_db),
):
    return _listing(
        *TopicService(db).get_topics(
            page=page, limit=limit, status_filter=status, category_id=category_id
        )
    )


@router.get("/subcategory/{subcategory_id}", response_model=TopicListResponse)
def list_topics_by_subcategory(
    subcategory_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: str = Query("published"),
    db: Session = Depends(get_db),
):
    return _listing(
        *TopicService(db).get_topics(
            page=page,
            limit=limit,
            status_filter=status,
            subcategory_id=subcategory_id,
        )
    )


@router.delete("/bulk-delete", response_model=ApiResponse[BulkDeleteData])
def bulk_delete_topics(
    request: TopicBulkDeleteRequest, db: Session = Depends(get_db)
):
    deleted_count = TopicService(db).bulk_delete(request.ids)
    return {"data": {"deleted_count": deleted_count}}


# ==================== Topic CRUD ====================


@router.post("", response_model=ApiResponse[TopicDetailResponse], status_code=201)
def create_topic(topic_in: TopicWrite, db: Session = Depends(get_db)):
    """
    Create a topic, optionally with nested ``modules[].videos[]``.
    """
    return {"data": TopicService(db).create_topic(topic_in)}


@router.get("/{topic_id}", response_model=ApiResponse[TopicDetailResponse])
def get_topic(topic_id: int, db: Session = Depends(get_db)):
    return {"data": TopicService(db).get_topic_detail(topic_id)}


@router.put("/{topic_id}", response_model=ApiResponse[TopicDetailResponse])
def update_topic(topic_id: int, topic_in: TopicWrite, db: Session = Depends(get_db)):
    """
    Update topic fields. When ``modules`` is a list it is treated as the full
    set of modules and videos the topic should end up with.
    """
    return {"data": TopicService(db).update_topic(topic_id, topic_in)}


@router.delete("/{topic_id}", response_model=ApiResponse[DeletedData])
def delete_topic(topic_id: int, db: Session = Depends(get_db)):
    TopicService(db).delete_topic(topic_id)
    return {"data": {"deleted": True}}
