"""Shared httpx client setup for the hosted Supabase storage and REST APIs."""

from typing import Optional

import httpx

from careerspark_ai.config import HTTP_TIMEOUT_SECONDS, SUPABASE_KEY, SUPABASE_URL


def make_supabase_client(
    url: str = SUPABASE_URL,
    api_key: str = SUPABASE_KEY,
    timeout: float = HTTP_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """AsyncClient bound to the project URL with service auth headers."""
    if not url or not api_key:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set to use the hosted stores")
    return httpx.AsyncClient(
        base_url=url.rstrip("/"),
        timeout=timeout,
        transport=transport,
        headers={
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
        },
    )
