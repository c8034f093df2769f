import jwt
from supabase import Client
from app.core.exceptions import OTPIssuanceFailed, OTPVerificationFailed, UserNotFound
from app.core.session import SessionContext
from app.modules.auth.schemas import VerifiedSession
from app.modules.users.schemas import UserResponse
from app.modules.users.service import UserService
from fastapi import HTTPException
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """Email OTP sign-in on top of Supabase Auth.

    ``supabase`` is used for table access and stateless token checks,
    ``session_client_factory`` returns a fresh client for the calls that create
    an auth session so that nothing is shared between requests.
    """

    def __init__(
        self,
        supabase: Client,
        session_client_factory: Callable[[], Client],
        user_service: Optional[UserService] = None,
    ):
        self.supabase = supabase
        self.session_client_factory = session_client_factory
        self.user_service = user_service or UserService(supabase)

    def request_otp(self, email: str, full_name: Optional[str] = None) -> str:
        """Send a sign-in code to ``email``, creating the account on first use. Returns the account ID."""
        email = email.strip().lower()
        try:
            users = self.user_service.get_users_by_email(email)
        except Exception as e:
            logger.error(f"Error fetching user by email: {e}")
            raise OTPIssuanceFailed()

        if len(users) > 1:
            logger.warning(f"Multiple users found with email {email}. Using the first one.")

        if users:
            account_id = users[0].account_id
        else:
            account_id = self._provision_account(email, full_name)

        self._send_email_otp(email)
        return account_id

    def resend_otp(self, email: str) -> str:
        """Issue a fresh code for an existing account; the previous code stops working."""
        email = email.strip().lower()
        users = self.user_service.get_users_by_email(email)
        if not users:
            raise UserNotFound()
        self._send_email_otp(email)
        return users[0].account_id

    def verify_otp(self, account_id: str, code: str) -> VerifiedSession:
        user = self.user_service.get_user_by_account_id(account_id)
        if user is None:
            raise UserNotFound()
        try:
            auth_response = self.session_client_factory().auth.verify_otp({
                "email": user.email,
                "token": code,
                "type": "email",
            })
        except Exception as e:
            logger.info(f"OTP verification failed for {account_id}: {e}")
            raise OTPVerificationFailed(str(e) or "Invalid or expired OTP")

        session = auth_response.session if auth_response else None
        if session is None or not session.access_token:
            raise OTPVerificationFailed()

        return VerifiedSession(
            session_id=_session_id(session.access_token) or account_id,
            account_id=account_id,
            secret=session.access_token,
            expires_in=session.expires_in,
        )

    def resolve_current_user(self, session: SessionContext) -> Optional[UserResponse]:
        """User for the session cookie, or None when not signed in."""
        if session.is_anonymous:
            return None
        try:
            user_response = self.supabase.auth.get_user(jwt=session.secret)
        except Exception as e:
            logger.info(f"Session token rejected: {e}")
            return None
        if not user_response or not user_response.user:
            return None
        try:
            return self.user_service.get_user_by_account_id(user_response.user.id)
        except Exception as e:
            logger.error(f"Error fetching user for session: {e}")
            return None

    def sign_out(self, session: SessionContext) -> bool:
        """Revoke the session. Failures are logged; the caller signs out locally either way."""
        if session.is_anonymous:
            return False
        try:
            # local: only this session, other devices stay signed in
            self.supabase.auth.admin.sign_out(session.secret, scope="local")
            return True
        except Exception as e:
            logger.error(f"Failed to revoke session: {e}")
            return False

    def _provision_account(self, email: str, full_name: Optional[str]) -> str:
        try:
            response = self.supabase.auth.admin.create_user({
                "email": email,
                "email_confirm": True,
                "user_metadata": {"full_name": full_name} if full_name else {},
            })
            if not response.user:
                raise OTPIssuanceFailed("Failed to create account")
            account_id = response.user.id
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already" not in error_message.lower():
                logger.error(f"Failed to create account for {email}: {error_message}")
                raise OTPIssuanceFailed("Failed to create account")
            # Auth user exists without a profile row, e.g. after an interrupted sign-up
            account_id = self._find_account_id(email)
            if account_id is None:
                raise OTPIssuanceFailed("Failed to create account")

        self.user_service.create_user(account_id, email, full_name)
        logger.info(f"Created account {account_id} for {email}")
        return account_id

    def _find_account_id(self, email: str) -> Optional[str]:
        page = 1
        while True:
            users = self.supabase.auth.admin.list_users(page=page, per_page=100)
            if not users:
                return None
            for user in users:
                if (user.email or "").lower() == email:
                    return user.id
            if len(users) < 100:
                return None
            page += 1

    def _send_email_otp(self, email: str) -> None:
        try:
            self.session_client_factory().auth.sign_in_with_otp({
                "email": email,
                "options": {"should_create_user": False},
            })
        except Exception as e:
            logger.error(f"Error creating email token: {e}")
            raise OTPIssuanceFailed()


def _session_id(access_token: str) -> Optional[str]:
    try:
        claims = jwt.decode(access_token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return None
    return claims.get("session_id")
