"""Optional shared-secret guard for the dreambook API.

The notebook is single-user and normally runs on the owner's machine, so the
guard is off unless ``API_KEY`` is set. When it is set, every router except
``/`` and ``/health`` requires the key.
"""

import logging
import secrets

from fastapi import Header, HTTPException

from dreambook.config import settings

logger = logging.getLogger(__name__)


def _presented_key(x_api_key: str | None, authorization: str | None) -> str | None:
    if x_api_key is not None:
        return x_api_key
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Accept the key from X-API-Key or Authorization: Bearer; 401 on mismatch."""
    expected = settings.api_key
    if expected is None:
        return ""

    key = _presented_key(x_api_key, authorization)
    if key is None or not secrets.compare_digest(key.encode(), expected.encode()):
        logger.warning("rejected request with %s API key", "missing" if key is None else "wrong")
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return key
