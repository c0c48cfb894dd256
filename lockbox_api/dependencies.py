"""
Request dependencies: settings, storage, session and the login guard.

Everything a handler needs is pulled from ``app.state`` (filled in by
``create_app``) or from the request's session and passed in explicitly.
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Request

from lockbox.auth.credentials import CredentialValidator
from lockbox.auth.sessions import SessionRegistry
from lockbox.config import Settings
from lockbox.storage.catalog import FileCatalog
from lockbox.storage.store import UploadStore

SESSION_USER_KEY = "user"
SESSION_ID_KEY = "sid"


class LoginRequired(Exception):
    """Raised when a guarded route is hit without a logged-in session."""


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> UploadStore:
    return request.app.state.store


def get_catalog(request: Request) -> FileCatalog:
    return request.app.state.catalog


def get_validator(request: Request) -> CredentialValidator:
    return request.app.state.validator


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_session(request: Request) -> Dict[str, Any]:
    """Return the cookie-backed session of the current request."""
    return request.session


def current_user(
    session: Dict[str, Any] = Depends(get_session),
    sessions: SessionRegistry = Depends(get_sessions),
) -> Optional[str]:
    """
    Return the logged-in username, or None for an anonymous session.

    The cookie must name a session id that is still registered and belongs
    to the same user.
    """
    user = session.get(SESSION_USER_KEY)
    if not user or sessions.user_for(session.get(SESSION_ID_KEY)) != user:
        return None
    return user


def require_user(user: Optional[str] = Depends(current_user)) -> str:
    """
    Guard for protected routes.

    Returns:
        The logged-in username

    Raises:
        LoginRequired: If the session has no user; answered with a redirect
            to the login page
    """
    if not user:
        raise LoginRequired()
    return user


def require_user_for_index(
    settings: Settings = Depends(get_settings),
    user: Optional[str] = Depends(current_user),
) -> Optional[str]:
    """Guard ``GET /`` only when PROTECT_INDEX is set."""
    if settings.PROTECT_INDEX:
        return require_user(user)
    return user


def require_user_for_uploads(
    settings: Settings = Depends(get_settings),
    user: Optional[str] = Depends(current_user),
) -> Optional[str]:
    """Guard ``GET /uploads/{name}`` only when PROTECT_UPLOADS is set."""
    if settings.PROTECT_UPLOADS:
        return require_user(user)
    return user
