from pydantic import BaseModel
from typing import Optional, List
from app.modules.files.schemas import FileResponse, UsageSummary
from app.modules.pages.pagination import Pagination
from app.modules.users.schemas import UserResponse


class SignInPage(BaseModel):
    request_otp: str
    resend_otp: str
    verify_otp: str


class DashboardPage(BaseModel):
    user: UserResponse
    usage: Optional[UsageSummary] = None
    recent_files: List[FileResponse] = []
    error: Optional[str] = None


class ProfilePage(BaseModel):
    user: UserResponse
    update_profile: str


class FileListPage(BaseModel):
    category: str
    user: UserResponse
    files: List[FileResponse] = []
    total: int = 0
    total_size: int = 0
    total_size_label: str = "0 Bytes"
    page: int = 1
    sort: str = ""
    query: str = ""
    pagination: Optional[Pagination] = None
    error: Optional[str] = None
