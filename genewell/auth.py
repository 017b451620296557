"""Optional API-key guard for the blueprint endpoints."""

import secrets

from fastapi import HTTPException, Header

from genewell.config import settings


def _extract_key(x_api_key: str | None, authorization: str | None) -> str | None:
    if x_api_key:
        return x_api_key.strip()
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Accept the key from X-API-Key or Authorization: Bearer.

    Open access while BLUEPRINT_API_KEY is unset; otherwise a mismatch is a 401.
    """
    expected = settings.blueprint_api_key
    if not expected:
        return ""

    key = _extract_key(x_api_key, authorization)
    if key is None or not secrets.compare_digest(key, expected):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")

    return key
