from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from enum import Enum


class Sex(str, Enum):
    male = "male"
    female = "female"


class ProfileUpdate(BaseModel):
    """Partial profile update.

    Only fields that were explicitly given are written (``model_fields_set``);
    a field left out keeps its stored value.
    """
    full_name: Optional[str] = None
    phone_number: Optional[int] = None
    sex: Optional[Sex] = None
    location: Optional[str] = None
    city: Optional[str] = None

    def to_update_data(self) -> dict:
        data = self.model_dump(mode="json", exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None}


class UserResponse(BaseModel):
    id: str
    account_id: str
    email: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None
    avatar_file_id: Optional[str] = None
    avatar_bucket_file_id: Optional[str] = None
    phone_number: Optional[int] = None
    sex: Optional[Sex] = None
    location: Optional[str] = None
    city: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
