"""Security helpers for API authentication."""

from __future__ import annotations

import os

from fastapi import Header, HTTPException, Query, status

from downpress.config import env_bool


def load_api_keys() -> set[str]:
    keys = {key.strip() for key in os.getenv("API_KEYS", "").split(",") if key.strip()}
    primary = (os.getenv("API_KEY") or "").strip()
    if primary:
        keys.add(primary)
    return keys


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    api_key_query: str | None = Query(default=None, alias="apiKey"),
) -> str | None:
    """Require a matching API key header when enabled via env.

    Returns the resolved API key (from header or query) so downstream
    dependencies can use the authenticated credential.
    """

    candidate = x_api_key or api_key_query

    if not env_bool("REQUIRE_API_KEY"):
        return candidate

    allowed_keys = load_api_keys()
    if not allowed_keys or candidate not in allowed_keys:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid api key",
        )

    return candidate


__all__ = ["load_api_keys", "require_api_key"]
