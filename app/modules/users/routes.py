from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from app.core.dependencies import get_current_user, get_user_service
from app.modules.files.schemas import FileUpload
from app.modules.users.schemas import ProfileUpdate, UserResponse
from app.modules.users.service import UserService
from pydantic import ValidationError
from typing import Optional

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_profile(current_user: UserResponse = Depends(get_current_user)):
    """Get the signed-in user's profile"""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    full_name: Optional[str] = Form(None),
    phone_number: Optional[str] = Form(None),
    sex: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    current_user: UserResponse = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Update the signed-in user's profile. Fields left out of the form, or sent empty, are not changed."""
    submitted = {
        "full_name": full_name,
        "phone_number": phone_number,
        "sex": sex,
        "location": location,
        "city": city,
    }
    try:
        updates = ProfileUpdate(**{k: v for k, v in submitted.items() if v not in (None, "")})
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    avatar_upload = None
    if avatar is not None and avatar.filename:
        avatar_upload = FileUpload(
            filename=avatar.filename,
            content=await avatar.read(),
            content_type=avatar.content_type,
        )

    return service.update_profile(current_user.account_id, updates, avatar=avatar_upload)
