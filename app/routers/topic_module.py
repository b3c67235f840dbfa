# app/routers/topic_module.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.common import ApiResponse, DeletedData, ReorderedData
from app.schemas.topic_module import (
    ModuleCreate,
    ModuleReorderRequest,
    ModuleResponse,
    ModuleUpdate,
    ModuleWithVideosResponse,
)
from app.services.topic_module import TopicModuleService

router = APIRouter(
    prefix="/topics/{topic_id}/modules",
    tags=["Topic Modules"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=ApiResponse[List[ModuleResponse]])
def list_modules(topic_id: int, db: Session = Depends(get_db)):
    return {"data": TopicModuleService(db).get_modules(topic_id)}


@router.post("", response_model=ApiResponse[ModuleResponse], status_code=201)
def create_module(topic_id: int, module_in: ModuleCreate, db: Session = Depends(get_db)):
    """
    Add a module. Without ``orderIndex`` it is appended after the last one.
    """
    return {"data": TopicModuleService(db).create_module(topic_id, module_in)}


@router.post("/reorder", response_model=ApiResponse[ReorderedData])
def reorder_modules(
    topic_id: int, request: ModuleReorderRequest, db: Session = Depends(get_db)
):
    reordered = TopicModuleService(db).reorder_modules(topic_id, request.module_ids)
    return {"data": {"reordered": reordered}}


@router.get("/{module_id}", response_model=ApiResponse[ModuleWithVideosResponse])
def get_module(topic_id: int, module_id: int, db: Session = Depends(get_db)):
    return {"data": TopicModuleService(db).get_module(topic_id, module_id)}


@router.put("/{module_id}", response_model=ApiResponse[ModuleResponse])
def update_module(
    topic_id: int,
    module_id: int,
    module_in: ModuleUpdate,
    db: Session = Depends(get_db),
):
    return {"data": TopicModuleService(db).update_module(topic_id, module_id, module_in)}


@router.delete("/{module_id}", response_model=ApiResponse[DeletedData])
def delete_module(topic_id: int, module_id: int, db: Session = Depends(get_db)):
    """
    Delete a module with its videos; the topic duration is recomputed.
    """
    TopicModuleService(db).delete_module(topic_id, module_id)
    return {"data": {"deleted": True}}
