"""
HTTP page fetching with retries for the CLI and API surfaces.

Extraction itself never touches the network; this module only turns an
address into a PageSnapshot when the caller has no rendered HTML.
"""
import logging
from typing import Any, Mapping, Optional

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from jobclip.config import Settings
from .page import PageSnapshot

logger = logging.getLogger(__name__)

MAX_RETRIES = 2
MAX_PAGE_SIZE_KB = 4096


class FetchError(Exception):
    """Page could not be fetched."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


def _headers(user_agent: Optional[str] = None) -> dict:
    return {
        "User-Agent": Settings.user_agent(user_agent),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }


@retry(
    stop=stop_after_attempt(MAX_RETRIES + 1),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    reraise=True
)
async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    return await client.get(url, follow_redirects=True)


async def fetch_html(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    user_agent: Optional[str] = None,
) -> str:
    """
    Fetch page HTML.

    Args:
        url: Page address
        client: Optional client (tests pass one built on httpx.MockTransport)
        user_agent: Overrides JOBCLIP_USER_AGENT

    Returns:
        Response body as text

    Raises:
        FetchError: on HTTP error status, oversized body, invalid address
            or network failure
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(Settings.fetch_timeout()),
            headers=_headers(user_agent),
        )

    try:
        response = await _get(client, url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"[net] Fetch failed for {url}: {e}")
        raise FetchError(url, f"Network error: {e.__class__.__name__}") from e
    finally:
        if owns_client:
            await client.aclose()

    if response.status_code >= 400:
        logger.warning(f"[net] HTTP {response.status_code} for {url}")
        raise FetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

    size_kb = len(response.content) / 1024
    if size_kb > MAX_PAGE_SIZE_KB:
        raise FetchError(url, f"Page too large ({size_kb:.0f} KB)", status_code=response.status_code)

    logger.info(f"[net] Fetched {url} ({size_kb:.1f} KB)")
    return response.text


async def fetch_page(
    url: str,
    state: Optional[Mapping[str, Any]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> PageSnapshot:
    """Fetch a page and wrap it in a snapshot."""
    html = await fetch_html(url, client=client)
    return PageSnapshot(url, html, state=state)
