from fastapi import APIRouter, Depends, File, Query, UploadFile
from app.core.dependencies import get_current_user, get_file_service
from app.modules.files.query import build_file_query
from app.modules.files.schemas import (
    FileResponse, FileListResponse, FileRename, FileUpload, UsageSummary
)
from app.modules.files.service import FileService
from app.modules.users.schemas import UserResponse
from typing import List, Optional

router = APIRouter(prefix="/files", tags=["files"])


@router.get("", response_model=FileListResponse)
async def list_files(
    category: str = "documents",
    page: int = 1,
    page_size: Optional[int] = Query(None, ge=1, le=100),
    sort: str = "",
    query: str = "",
    current_user: UserResponse = Depends(get_current_user),
    service: FileService = Depends(get_file_service)
):
    """List the signed-in user's files in a category, one page at a time"""
    file_query = build_file_query(category, page=page, page_size=page_size, search_text=query, sort=sort)
    return service.list_files(file_query, owner_id=current_user.id)


@router.get("/recent", response_model=List[FileResponse])
async def recent_files(
    limit: int = Query(10, ge=1, le=50),
    current_user: UserResponse = Depends(get_current_user),
    service: FileService = Depends(get_file_service)
):
    """Most recently uploaded files"""
    return service.get_recent_files(current_user.id, limit=limit)


@router.get("/usage", response_model=UsageSummary)
async def usage(
    current_user: UserResponse = Depends(get_current_user),
    service: FileService = Depends(get_file_service)
):
    """Storage used per category"""
    return service.get_usage_summary(current_user.id)


@router.post("", response_model=FileResponse, status_code=201)
async def upload_file(
    file: UploadFile = File(...),
    current_user: UserResponse = Depends(get_current_user),
    service: FileService = Depends(get_file_service)
):
    """Upload a file"""
    upload = FileUpload(
        filename=file.filename or "untitled",
        content=await file.read(),
        content_type=file.content_type,
    )
    return service.upload_file(current_user, upload)


@router.patch("/{file_id}", response_model=FileResponse)
async def rename_file(
    file_id: str,
    rename_data: FileRename,
    current_user: UserResponse = Depends(get_current_user),
    service: FileService = Depends(get_file_service)
):
    """Rename a file; the extension is kept"""
    return service.rename_file(current_user.id, file_id, rename_data.name)


@router.delete("/{file_id}", status_code=204)
async def delete_file(
    file_id: str,
    current_user: UserResponse = Depends(get_current_user),
    service: FileService = Depends(get_file_service)
):
    """Delete a file and its stored contents"""
    service.delete_file(current_user.id, file_id)
    return None
