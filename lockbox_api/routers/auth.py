"""
Router for login and logout.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from lockbox.auth.credentials import CredentialValidator
from lockbox.auth.sessions import SessionRegistry
from lockbox_api.dependencies import (
    SESSION_ID_KEY,
    SESSION_USER_KEY,
    get_session,
    get_sessions,
    get_validator,
)
from lockbox_api.views import render_login, render_login_failed

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/login", response_class=HTMLResponse, summary="Login page")
async def login_page() -> HTMLResponse:
    return HTMLResponse(render_login())


@router.post("/login", summary="Log in with the configured credentials")
async def login(
    username: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    session: Dict[str, Any] = Depends(get_session),
    sessions: SessionRegistry = Depends(get_sessions),
    validator: CredentialValidator = Depends(get_validator),
):
    """
    Check the submitted credentials.

    On success a new server-side session is registered, its id and the
    username are stored in the cookie and the browser is sent to the upload
    page. On failure the session is left untouched and an error page with
    a retry link is returned.
    """
    if validator.validate(username, password):
        sessions.destroy(session.get(SESSION_ID_KEY))
        session[SESSION_ID_KEY] = sessions.create(username)
        session[SESSION_USER_KEY] = username
        return RedirectResponse("/", status_code=302)

    return HTMLResponse(render_login_failed())


@router.get("/logout", summary="Log out")
async def logout(
    session: Dict[str, Any] = Depends(get_session),
    sessions: SessionRegistry = Depends(get_sessions),
) -> RedirectResponse:
    user = session.get(SESSION_USER_KEY)
    sessions.destroy(session.get(SESSION_ID_KEY))
    session.clear()
    if user:
        logger.info(f"User {user!r} logged out")
    return RedirectResponse("/login", status_code=302)
