"""
Openverse API client.

Searches Openverse (WordPress.org's Creative Commons media search) for
images. Anonymous access is rate limited by the API; a 429 is reported as
an upstream failure with that explanation.
"""

import logging
from typing import Any

import httpx

from elementor_mcp.core.exceptions import InvalidInputError, UpstreamFailureError
from elementor_mcp.models.contracts.media import ImageSearchPage, StockImage

logger = logging.getLogger(__name__)

OPENVERSE_API_URL = "https://api.openverse.org/v1"
DEFAULT_TIMEOUT = 15.0
USER_AGENT = "Elementor-MCP/1.0"

MAX_PAGE_SIZE = 20
DEFAULT_PAGE_SIZE = 5

SEARCH_FILTERS = ("license", "source", "aspect_ratio", "size", "category")


class OpenverseClient:
    """
    Image search over the Openverse REST API.

    Args:
        base_url: API root, without trailing slash
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str = OPENVERSE_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def search_images(
        self,
        query: str,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        **filters: str | None,
    ) -> ImageSearchPage:
        """
        Search for images.

        Args:
            query: Search keywords
            page: Page number (at least 1)
            page_size: Results per page, capped at 20
            **filters: license, source, aspect_ratio, size, category

        Raises:
            InvalidInputError: If query is empty
            UpstreamFailureError: On network errors, rate limiting or bad responses
        """
        if not query or not query.strip():
            raise InvalidInputError("The query parameter is required.", field="query")

        params: dict[str, Any] = {
            "q": query.strip(),
            "page_size": min(max(int(page_size or DEFAULT_PAGE_SIZE), 1), MAX_PAGE_SIZE),
            "page": max(int(page or 1), 1),
        }
        for name in SEARCH_FILTERS:
            value = filters.get(name)
            if value:
                params[name] = value
        params["mature"] = "false"

        data = await self._get("/images/", params)
        results = data.get("results") or []
        return ImageSearchPage(
            result_count=int(data.get("result_count") or 0),
            page=int(data.get("page") or params["page"]),
            page_count=int(data.get("page_count") or 0),
            results=[StockImage.model_validate(item) for item in results if isinstance(item, dict)],
        )

    async def get_image(self, image_id: str) -> StockImage:
        """Details for one image by its Openverse id."""
        if not image_id:
            raise InvalidInputError("The image_id parameter is required.", field="image_id")
        return StockImage.model_validate(await self._get(f"/images/{image_id}/"))

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        ) as client:
            try:
                response = await client.get(path, params=params)
            except httpx.HTTPError as e:
                logger.error(f"Openverse request to {path} failed: {e}")
                raise UpstreamFailureError(f"Openverse API request failed: {e}") from e

        if response.status_code == 429:
            raise UpstreamFailureError(
                "Openverse API rate limit reached. Please wait before making more requests."
            )
        if not response.is_success:
            logger.error(f"Openverse API error: {response.status_code} - {response.text}")
            raise UpstreamFailureError(f"Openverse API returned HTTP {response.status_code}.")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFailureError("Failed to parse Openverse API response.") from e
        if not isinstance(data, dict):
            raise UpstreamFailureError("Failed to parse Openverse API response.")
        return data
