"""
Server-side registry of logged-in sessions.

The session cookie only carries a random id and the username. A cookie is
honoured only while its id is still registered here, so logging out ends
the session even for copies of the cookie made before logout.
"""

import logging
import secrets
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Thread-safe map of active session ids to usernames."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: Dict[str, str] = {}

    def create(self, username: str) -> str:
        """
        Register a new session.

        Args:
            username: User the session belongs to

        Returns:
            Random session id to store in the cookie
        """
        session_id = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[session_id] = username
        return session_id

    def user_for(self, session_id: Optional[str]) -> Optional[str]:
        """Return the username of an active session, or None."""
        if not session_id:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def destroy(self, session_id: Optional[str]) -> None:
        """Forget a session. Unknown ids are ignored."""
        if not session_id:
            return
        with self._lock:
            self._sessions.pop(session_id, None)
