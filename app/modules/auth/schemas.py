from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class OTPRequest(BaseModel):
    email: EmailStr
    full_name: Optional[str] = None


class OTPResendRequest(BaseModel):
    email: EmailStr


class OTPResponse(BaseModel):
    account_id: str
    message: str = "OTP sent"


class OTPVerifyRequest(BaseModel):
    account_id: str = Field(..., min_length=1)
    code: str = Field(..., min_length=6, max_length=10)


class OTPVerifyResponse(BaseModel):
    session_id: str
    account_id: str


class VerifiedSession(BaseModel):
    session_id: str
    account_id: str
    secret: str
    expires_in: Optional[int] = None
