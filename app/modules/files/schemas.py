from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class FileResponse(BaseModel):
    id: str
    name: str
    url: str
    type: str
    extension: Optional[str] = None
    size: int
    owner_id: str
    account_id: str
    bucket_file_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FileListResponse(BaseModel):
    documents: List[FileResponse]
    total: int  # matching rows, independent of limit/offset
    total_size: int  # bytes over all matching rows, not just this page


class FileUpload(BaseModel):
    filename: str
    content: bytes
    content_type: Optional[str] = None


class FileRename(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class CategoryUsage(BaseModel):
    size: int = 0
    latest: Optional[datetime] = None


class UsageSummary(BaseModel):
    documents: CategoryUsage
    images: CategoryUsage
    media: CategoryUsage
    others: CategoryUsage
    used: int
    all: int
