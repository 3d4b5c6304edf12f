"""
Authentication Module

Shared-secret header checks. Uploads accept either the API secret
(x-api-secret) or the admin secret (x-admin-secret); listing and deleting
records require the admin secret.
"""

import hmac
import logging
from typing import Optional

from fastapi import Header, HTTPException

from .config import get_settings

logger = logging.getLogger(__name__)


def secrets_match(provided: Optional[str], expected: Optional[str]) -> bool:
    """
    Constant-time comparison of a provided secret against the configured one.

    An unconfigured secret never matches.
    """
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    x_admin_secret: Optional[str] = Header(default=None),
) -> None:
    """
    Require a valid x-admin-secret header.

    Raises:
        HTTPException: 401 if the secret is missing or wrong
    """
    if not secrets_match(x_admin_secret, get_settings().admin_secret):
        raise HTTPException(status_code=401, detail="Unauthorized")


async def require_uploader(
    x_api_secret: Optional[str] = Header(default=None),
    x_admin_secret: Optional[str] = Header(default=None),
) -> None:
    """
    Require a valid x-api-secret or x-admin-secret header.

    Raises:
        HTTPException: 401 if neither secret matches
    """
    settings = get_settings()
    if secrets_match(x_api_secret, settings.api_secret):
        return
    if secrets_match(x_admin_secret, settings.admin_secret):
        return
    raise HTTPException(status_code=401, detail="Unauthorized")
