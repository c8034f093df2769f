"""
Core dependencies for service construction and route protection
"""

from fastapi import Depends, HTTPException, status
from app.core.session import SessionContext, get_session
from app.database.supabase_client import SupabaseClient, get_service_supabase
from app.modules.auth.service import AuthService
from app.modules.files.service import FileService
from app.modules.users.schemas import UserResponse
from app.modules.users.service import UserService
from supabase import Client
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


def get_session_client_factory() -> Callable[[], Client]:
    return SupabaseClient.create_session_client


def get_file_service(supabase: Client = Depends(get_service_supabase)) -> FileService:
    return FileService(supabase)


def get_user_service(
    supabase: Client = Depends(get_service_supabase),
    file_service: FileService = Depends(get_file_service),
) -> UserService:
    return UserService(supabase, file_service=file_service)


def get_auth_service(
    supabase: Client = Depends(get_service_supabase),
    session_client_factory: Callable[[], Client] = Depends(get_session_client_factory),
    user_service: UserService = Depends(get_user_service),
) -> AuthService:
    return AuthService(supabase, session_client_factory, user_service=user_service)


def get_current_user_optional(
    session: SessionContext = Depends(get_session),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[UserResponse]:
    """Current user from the session cookie, or None. Pages use this to redirect to sign-in."""
    return auth_service.resolve_current_user(session)


def get_current_user(
    user: Optional[UserResponse] = Depends(get_current_user_optional),
) -> UserResponse:
    """Current user from the session cookie; 401 when not signed in"""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return user
