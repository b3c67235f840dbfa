# app/routers/topic_video.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, DeletedData, ReorderedData
from app.schemas.topic_video import (
    VideoCreate,
    VideoReorderRequest,
    VideoResponse,
    VideoUpdate,
)
from app.services.topic_video import TopicVideoService

router = APIRouter(
    prefix="/topics/{topic_id}/modules/{module_id}/videos",
    tags=["Topic Videos"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=ApiResponse[List[VideoResponse]])
def list_videos(
    topic_id: int,
    module_id: int,
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: Session = Depends(get_db),
):
    videos = TopicVideoService(db).get_videos(topic_id, module_id, include_inactive)
    return {"data": videos}


@router.post("", response_model=ApiResponse[VideoResponse], status_code=201)
def create_video(
    topic_id: int,
    module_id: int,
    video_in: VideoCreate,
    db: Session = Depends(get_db),
):
    return {"data": TopicVideoService(db).create_video(topic_id, module_id, video_in)}


@router.post("/upload", response_model=ApiResponse[VideoResponse], status_code=201)
async def upload_video(
    topic_id: int,
    module_id: int,
    video: UploadFile = File(...),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    duration: Optional[str] = Form(None, description="Duration in minutes"),
    db: Session = Depends(get_db),
):
    """
    Upload a video file and add it to the module in one step.
    """
    created = await TopicVideoService(db).upload_video(
        topic_id, module_id, video, title, description, duration
    )
    return {"data": created, "message": "Video uploaded successfully to module"}


@router.post(
    "/upload-multiple", response_model=ApiResponse[List[VideoResponse]], status_code=201
)
async def upload_videos(
    topic_id: int,
    module_id: int,
    videos: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
):
    created = await TopicVideoService(db).upload_videos(topic_id, module_id, videos)
    return {
        "data": created,
        "message": f"Bulk video upload completed: {len(created)} videos uploaded successfully",
    }


@router.post("/reorder", response_model=ApiResponse[ReorderedData])
def reorder_videos(
    topic_id: int,
    module_id: int,
    request: VideoReorderRequest,
    db: Session = Depends(get_db),
):
    reordered = TopicVideoService(db).reorder_videos(
        topic_id, module_id, request.video_ids
    )
    return {"data": {"reordered": reordered}}


@router.get("/{video_id}", response_model=ApiResponse[VideoResponse])
def get_video(topic_id: int, module_id: int, video_id: int, db: Session = Depends(get_db)):
    return {"data": TopicVideoService(db).get_video(topic_id, module_id, video_id)}


@router.put("/{video_id}", response_model=ApiResponse[VideoResponse])
def update_video(
    topic_id: int,
    module_id: int,
    video_id: int,
    video_in: VideoUpdate,
    db: Session = Depends(get_db),
):
    video = TopicVideoService(db).update_video(topic_id, module_id, video_id, video_in)
    return {"data": video}


@router.delete("/{video_id}", response_model=ApiResponse[DeletedData])
def delete_video(
    topic_id: int, module_id: int, video_id: int, db: Session = Depends(get_db)
):
    TopicVideoService(db).delete_video(topic_id, module_id, video_id)
    return {"data": {"deleted": True}}
