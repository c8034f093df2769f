from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse
from app.config import settings
from app.core.dependencies import get_auth_service, get_current_user
from app.core.rate_limit import limiter
from app.core.session import SessionContext, get_session, set_session_cookie, clear_session_cookie
from app.modules.auth.schemas import (
    OTPRequest, OTPResendRequest, OTPResponse, OTPVerifyRequest, OTPVerifyResponse
)
from app.modules.auth.service import AuthService
from app.modules.users.schemas import UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/otp", response_model=OTPResponse)
@limiter.limit(settings.otp_rate_limit)
async def request_otp(
    request: Request,
    otp_data: OTPRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Email a one-time sign-in code; creates the account for a new email"""
    account_id = service.request_otp(otp_data.email, otp_data.full_name)
    return OTPResponse(account_id=account_id)


@router.post("/otp/resend", response_model=OTPResponse)
@limiter.limit(settings.otp_rate_limit)
async def resend_otp(
    request: Request,
    otp_data: OTPResendRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send a new code, replacing any code sent before"""
    account_id = service.resend_otp(otp_data.email)
    return OTPResponse(account_id=account_id, message="OTP resent")


@router.post("/otp/verify", response_model=OTPVerifyResponse)
@limiter.limit(settings.otp_rate_limit)
async def verify_otp(
    request: Request,
    response: Response,
    verify_data: OTPVerifyRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange a code for a session cookie"""
    verified = service.verify_otp(verify_data.account_id, verify_data.code)
    set_session_cookie(response, verified.secret, max_age=verified.expires_in)
    return OTPVerifyResponse(session_id=verified.session_id, account_id=verified.account_id)


@router.post("/sign-out")
async def sign_out(
    session: SessionContext = Depends(get_session),
    service: AuthService = Depends(get_auth_service)
):
    """Revoke the session and return to sign-in, even when revocation fails"""
    service.sign_out(session)
    redirect = RedirectResponse(url=settings.sign_in_path, status_code=303)
    clear_session_cookie(redirect)
    return redirect


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user)):
    """Get the signed-in user's profile"""
    return current_user
