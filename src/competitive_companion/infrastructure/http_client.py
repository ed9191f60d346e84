"""Async HTTP client used for page fetches and receiver delivery."""

import httpx
from loguru import logger

from competitive_companion.domain.exceptions import FetchError


class AsyncHTTPClient:
    """Thin wrapper around httpx.AsyncClient."""

    DEFAULT_HEADERS = {
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }

    def __init__(
        self,
        timeout: float = 15.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            timeout: Request timeout in seconds
            user_agent: Optional User-Agent header
            transport: Optional httpx transport (used by tests)
        """
        headers = dict(self.DEFAULT_HEADERS)
        if user_agent:
            headers["User-Agent"] = user_agent

        self.timeout = timeout
        self._client = httpx.AsyncClient(
            follow_redirects=True,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    async def get_text(self, url: str) -> str:
        """Get text content from URL."""
        logger.debug(f"GET {url}")

        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(url, str(e) or type(e).__name__) from e

        if response.is_error:
            raise FetchError(url, f"HTTP {response.status_code}", response.status_code)

        return response.text

    async def post_text(
        self, url: str, content: str, content_type: str = "application/json"
    ) -> str:
        """POST a text body and return the response text."""
        logger.debug(f"POST {url} ({len(content)} bytes)")

        try:
            response = await self._client.post(
                url,
                content=content.encode("utf-8"),
                headers={"Content-Type": content_type},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(url, str(e) or type(e).__name__) from e

        if response.is_error:
            raise FetchError(url, f"HTTP {response.status_code}", response.status_code)

        return response.text

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
