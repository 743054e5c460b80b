"""Placeholder password gate for the admin dashboard.

The expected value comes from configuration and is shared by every admin.
This keeps casual visitors out of the dashboard; it is not authentication.
"""

from __future__ import annotations

import hmac
import logging

from designpoll.core.errors import AuthorizationError

logger = logging.getLogger(__name__)


def check_password(supplied: str | None, expected: str, purpose: str = "admin") -> None:
    """Compare a supplied password with the configured one.

    Raises:
        AuthorizationError: If the password is missing or wrong.
    """
    if not supplied or not hmac.compare_digest(supplied.encode(), expected.encode()):
        logger.warning(f"Rejected {purpose} password")
        raise AuthorizationError(f"Invalid {purpose} password")
