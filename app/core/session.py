"""Session cookie handling.

The session secret travels in an HTTP-only cookie. Handlers that need the
caller's identity receive it as an explicit ``SessionContext`` dependency.
"""
from fastapi import Request, Response
from pydantic import BaseModel
from typing import Optional
from app.config import settings


class SessionContext(BaseModel):
    secret: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return not self.secret


def get_session(request: Request) -> SessionContext:
    return SessionContext(secret=request.cookies.get(settings.session_cookie_name) or None)


def set_session_cookie(response: Response, secret: str, max_age: Optional[int] = None) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=secret,
        max_age=max_age,
        path="/",
        secure=True,
        httponly=True,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=True,
        httponly=True,
        samesite="strict",
    )
