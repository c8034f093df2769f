from supabase import Client
from app.config import settings
from app.core.exceptions import MissingAccountId, UserNotFound
from app.modules.files.schemas import FileUpload
from app.modules.files.service import FileService
from app.modules.users.schemas import ProfileUpdate, UserResponse
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client, file_service: Optional[FileService] = None):
        self.supabase = supabase
        self._file_service = file_service

    @property
    def file_service(self) -> FileService:
        if self._file_service is None:
            self._file_service = FileService(self.supabase)
        return self._file_service

    def _table(self):
        return self.supabase.table(settings.users_table)

    def get_user_by_account_id(self, account_id: str) -> Optional[UserResponse]:
        """Get user profile by auth account ID"""
        result = self._table()\
            .select("*")\
            .eq("account_id", account_id)\
            .limit(1)\
            .execute()
        if not result.data:
            return None
        return UserResponse(**result.data[0])

    def get_users_by_email(self, email: str) -> List[UserResponse]:
        """All profiles registered with an email, oldest first"""
        result = self._table()\
            .select("*")\
            .eq("email", email)\
            .order("created_at")\
            .execute()
        return [UserResponse(**user) for user in result.data or []]

    def create_user(self, account_id: str, email: str, full_name: Optional[str] = None) -> UserResponse:
        """Create the profile for a new account, with the placeholder avatar"""
        result = self._table().insert({
            "account_id": account_id,
            "email": email,
            "full_name": full_name,
            "avatar": settings.avatar_placeholder_url,
        }).execute()
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create user")
        return UserResponse(**result.data[0])

    def update_profile(
        self,
        account_id: str,
        updates: ProfileUpdate,
        avatar: Optional[FileUpload] = None,
    ) -> UserResponse:
        """Apply a partial profile update, replacing the avatar when a new one is given.

        The new avatar is stored before anything is deleted; the previous one is
        removed only after the profile points at the new one.
        """
        if not account_id:
            raise MissingAccountId()

        current = self.get_user_by_account_id(account_id)
        if current is None:
            raise UserNotFound()

        update_data = updates.to_update_data()
        new_avatar = None
        if avatar is not None:
            new_avatar = self.file_service.upload_file(current, avatar)
            update_data.update({
                "avatar": new_avatar.url,
                "avatar_file_id": new_avatar.id,
                "avatar_bucket_file_id": new_avatar.bucket_file_id,
            })

        if not update_data:
            return current

        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self._table()\
                .update(update_data)\
                .eq("account_id", account_id)\
                .execute()
            if not result.data:
                raise UserNotFound()
        except Exception as e:
            if new_avatar is not None:
                self._discard_avatar(current.id, new_avatar.id)
            if isinstance(e, HTTPException):
                raise
            raise HTTPException(status_code=500, detail=str(e))

        if new_avatar is not None and self._has_stored_avatar(current):
            self._discard_avatar(current.id, current.avatar_file_id)

        return UserResponse(**result.data[0])

    @staticmethod
    def _has_stored_avatar(user: UserResponse) -> bool:
        return bool(
            user.avatar_file_id
            and user.avatar_bucket_file_id
            and user.avatar != settings.avatar_placeholder_url
        )

    def _discard_avatar(self, owner_id: str, file_id: str) -> None:
        try:
            self.file_service.delete_file(owner_id, file_id)
        except Exception as e:
            logger.warning(f"Failed to delete avatar file {file_id}: {e}")
