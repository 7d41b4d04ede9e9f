"""Article fetching with httpx (no JS rendering)."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/136.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


@dataclass
class FetchResult:
    """Result from fetching a URL."""

    html: str
    url: str
    status: int
    headers: dict[str, str] = field(default_factory=dict)


async def fetch_static(
    url: str,
    timeout: int = 30,
    follow_redirects: bool = True,
    headers: dict[str, str] | None = None,
    verify_ssl: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchResult:
    """Fetch a page's HTML.

    Raises httpx.HTTPStatusError for non-2xx responses.
    """
    request_headers = dict(DEFAULT_HEADERS)
    if headers:
        request_headers.update(headers)

    async with httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=follow_redirects,
        headers=request_headers,
        verify=verify_ssl,
        transport=transport,
    ) as client:
        response = await client.get(url)
        response.raise_for_status()
        return FetchResult(
            html=response.text,
            url=str(response.url),
            status=response.status_code,
            headers=dict(response.headers),
        )
