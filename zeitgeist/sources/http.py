"""Thin httpx helpers shared by every source adapter."""

from typing import Any, Optional

import httpx


class SourceFetchError(Exception):
    """Raised when a source cannot produce a usable reading."""

    def __init__(self, source_id: str, reason: str):
        super().__init__(f"{source_id}: {reason}")
        self.source_id = source_id
        self.reason = reason


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[dict] = None,
) -> Any:
    """GET a URL and decode its JSON body. Non-2xx responses raise."""
    r = await client.get(url, params=params)
    r.raise_for_status()
    return r.json()


def truncate(text: Optional[str], limit: int) -> Optional[str]:
    """Cap free text before it reaches a reading."""
    if text is None or len(text) <= limit:
        return text
    return text[:limit] + "..."
