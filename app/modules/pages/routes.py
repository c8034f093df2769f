from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from app.config import settings
from app.core.dependencies import get_auth_service, get_current_user_optional, get_file_service
from app.core.exceptions import FetchFailure, InvalidCategory
from app.core.session import SessionContext, get_session
from app.modules.auth.service import AuthService
from app.modules.files.file_types import format_bytes
from app.modules.files.query import build_file_query
from app.modules.files.service import FileService
from app.modules.pages.pagination import build_pagination, current_page
from app.modules.pages.schemas import DashboardPage, FileListPage, ProfilePage, SignInPage
from app.modules.users.schemas import UserResponse
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _sign_in_redirect() -> RedirectResponse:
    return RedirectResponse(url=settings.sign_in_path)


@router.get(settings.sign_in_path, response_model=SignInPage)
async def sign_in_page():
    return SignInPage(
        request_otp="/api/v1/auth/otp",
        resend_otp="/api/v1/auth/otp/resend",
        verify_otp="/api/v1/auth/otp/verify",
    )


@router.get("/")
async def dashboard_page(
    current_user: Optional[UserResponse] = Depends(get_current_user_optional),
    service: FileService = Depends(get_file_service),
):
    """Storage usage and recent uploads"""
    if current_user is None:
        return _sign_in_redirect()
    try:
        usage = service.get_usage_summary(current_user.id)
        recent = service.get_recent_files(current_user.id)
    except FetchFailure as e:
        return DashboardPage(user=current_user, error=e.detail)
    return DashboardPage(user=current_user, usage=usage, recent_files=recent)


@router.get("/profile")
async def profile_page(current_user: Optional[UserResponse] = Depends(get_current_user_optional)):
    if current_user is None:
        return _sign_in_redirect()
    return ProfilePage(user=current_user, update_profile="/api/v1/users/me")


@router.get("/{category}")
async def file_list_page(
    category: str,
    request: Request,
    sort: str = "",
    query: str = "",
    session: SessionContext = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
    service: FileService = Depends(get_file_service),
):
    """Files of one category with search, sort and pagination"""
    page = current_page(request.url)
    try:
        file_query = build_file_query(category, page=page, search_text=query, sort=sort)
    except InvalidCategory:
        return RedirectResponse(url="/")

    current_user = auth_service.resolve_current_user(session)
    if current_user is None:
        return _sign_in_redirect()

    listing_page = FileListPage(
        category=category,
        user=current_user,
        page=file_query.page,
        sort=sort,
        query=query,
    )
    try:
        listing = service.list_files(file_query, owner_id=current_user.id)
    except FetchFailure as e:
        listing_page.error = e.detail
        return listing_page

    listing_page.files = listing.documents
    listing_page.total = listing.total
    listing_page.total_size = listing.total_size
    listing_page.total_size_label = format_bytes(listing.total_size)
    listing_page.pagination = build_pagination(
        request.url, file_query.page, listing.total, file_query.limit
    )
    return listing_page
