"""
Credential validation for the single configured account.
"""

import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class CredentialValidator:
    """Checks a username/password pair against the configured one."""

    def __init__(self, username: str, password: str):
        self._username = username
        self._password = password

    def validate(self, username: Optional[str], password: Optional[str]) -> bool:
        """
        Check submitted credentials.

        Args:
            username: Submitted username
            password: Submitted password

        Returns:
            True if both values match the configured pair exactly
        """
        if username is None or password is None:
            return False

        # both comparisons always run
        user_ok = hmac.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))

        if user_ok and password_ok:
            logger.info(f"Login accepted for user {username!r}")
            return True

        logger.warning(f"Login rejected for user {username!r}")
        return False
