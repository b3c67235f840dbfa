# app/routers/upload.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, DeletedData
from app.schemas.topic import TopicResponse
from app.schemas.topic_video import VideoResponse
from app.schemas.upload import BulkUploadData, UploadListResponse, UploadResponse
from app.services.topic_video import TopicVideoService
from app.services.upload import UploadService

router = APIRouter(
    prefix="/upload",
    tags=["Uploads"],
    responses={404: {"description": "Not found"}},
)


# ==================== Single Files ====================


@router.post("/image", response_model=ApiResponse[UploadResponse])
async def upload_image(
    image: UploadFile = File(...),
    category: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    upload = await UploadService(db).upload_file(image, "image", category)
    return {"data": upload, "message": "Image uploaded successfully"}


@router.post("/video", response_model=ApiResponse[UploadResponse])
async def upload_video(
    video: UploadFile = File(...),
    category: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    upload = await UploadService(db).upload_file(video, "video", category)
    return {"data": upload, "message": "Video uploaded successfully"}


@router.post("/document", response_model=ApiResponse[UploadResponse])
async def upload_document(
    document: UploadFile = File(...),
    category: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    upload = await UploadService(db).upload_file(document, "document", category)
    return {"data": upload, "message": "Document uploaded successfully"}


@router.post("/thumbnail", response_model=ApiResponse[UploadResponse])
async def upload_thumbnail(
    thumbnail: UploadFile = File(...),
    category: Optional[str] = Form(None),
    video_id: Optional[int] = Form(None, alias="videoId"),
    topic_id: Optional[int] = Form(None, alias="topicId"),
    db: Session = Depends(get_db),
):
    """
    Upload a thumbnail. ``videoId``/``topicId`` point those rows at it.
    """
    upload = await UploadService(db).upload_thumbnail(
        thumbnail, category, topic_id=topic_id, video_id=video_id
    )
    return {"data": upload, "message": "Thumbnail uploaded successfully"}


# ==================== Topic & Video Files ====================


@router.post(
    "/topics/{topic_id}/modules/{module_id}/video",
    response_model=ApiResponse[VideoResponse],
    status_code=201,
)
async def upload_module_video(
    topic_id: int,
    module_id: int,
    video: UploadFile = File(...),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    duration: Optional[str] = Form(None, description="Duration in minutes"),
    db: Session = Depends(get_db),
):
    created = await TopicVideoService(db).upload_video(
        topic_id, module_id, video, title, description, duration
    )
    return {"data": created, "message": "Video uploaded successfully to module"}


@router.post("/topics/{topic_id}/thumbnail", response_model=ApiResponse[TopicResponse])
async def upload_topic_thumbnail(
    topic_id: int,
    thumbnail: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    service = UploadService(db)
    await service.upload_thumbnail(thumbnail, "topic-thumbnail", topic_id=topic_id)
    return {
        "data": service.get_topic(topic_id),
        "message": "Topic thumbnail uploaded successfully",
    }


@router.post("/videos/{video_id}/thumbnail", response_model=ApiResponse[VideoResponse])
async def upload_video_thumbnail(
    video_id: int,
    thumbnail: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    service = UploadService(db)
    await service.upload_thumbnail(thumbnail, "video-thumbnail", video_id=video_id)
    return {
        "data": service.get_video(video_id),
        "message": "Video thumbnail uploaded successfully",
    }


@router.put("/videos/{video_id}/replace", response_model=ApiResponse[VideoResponse])
async def replace_video(
    video_id: int,
    video: UploadFile = File(...),
    duration: Optional[str] = Form(None, description="Duration in minutes"),
    db: Session = Depends(get_db),
):
    """
    Swap the file behind a video; module and topic durations are recomputed.
    """
    replaced = await TopicVideoService(db).replace_video_file(video_id, video, duration)
    return {"data": replaced, "message": "Video replaced successfully"}


# ==================== Bulk & Listing ====================


@router.post("/bulk", response_model=ApiResponse[BulkUploadData])
async def upload_bulk(
    files: List[UploadFile] = File(...),
    type: str = Form("image"),
    category: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    uploads = await UploadService(db).upload_bulk(files, type, category)
    return {
        "data": {"uploaded": len(uploads), "files": uploads},
        "message": f"Bulk upload completed: {len(uploads)} files uploaded successfully",
    }


@router.get("/files", response_model=UploadListResponse)
def list_files(
    type: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    uploads, pagination = UploadService(db).get_files(type, page, limit)
    return {"data": uploads, "meta": pagination}


@router.delete("/files/{upload_id}", response_model=ApiResponse[DeletedData])
def delete_file(upload_id: str, db: Session = Depends(get_db)):
    UploadService(db).delete_file(upload_id)
    return {"data": {"deleted": True}, "message": "File deleted successfully"}
