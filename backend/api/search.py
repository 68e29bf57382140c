from typing import Any, Dict, List, Optional

import httpx

from config import logger
from config.constants import SEARCH_CONFIG, SearchConfig
from exceptions import SearchException
from models.sources import SearchHit

_THUMBNAIL_PATHS = (
    ("cse_thumbnail", "src"),
    ("metatags", "og:image"),
    ("metatags", "twitter:image"),
    ("metatags", "twitter:image:src"),
)


def resolve_thumbnail(item: Dict[str, Any]) -> Optional[str]:
    pagemap = item.get("pagemap") or {}
    for section, key in _THUMBNAIL_PATHS:
        entries = pagemap.get(section) or []
        if isinstance(entries, list) and entries and isinstance(entries[0], dict):
            value = entries[0].get(key)
            if value:
                return value
    return None


def to_search_hit(item: Dict[str, Any]) -> SearchHit:
    return SearchHit(
        title=item.get("title"),
        snippet=item.get("snippet"),
        link=item.get("link"),
        display_domain=item.get("displayLink"),
        formatted_url=item.get("formattedUrl"),
        thumbnail_url=resolve_thumbnail(item),
    )


class GoogleSearchClient:
    """Thin Google Custom Search client: one query in, ranked SearchHits out."""

    def __init__(
        self,
        api_key: str,
        cx: str,
        verify_ssl: bool = True,
        client: Optional[httpx.AsyncClient] = None,
        config: SearchConfig = SEARCH_CONFIG,
    ):
        self.api_key = api_key or ""
        self.cx = cx or ""
        self.verify_ssl = verify_ssl
        self.config = config
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.cx)

    async def search(self, query: str) -> List[SearchHit]:
        if not self.is_configured:
            logger.error("Google Custom Search credentials are not configured.")
            raise SearchException("Google Custom Search credentials are not configured.", recoverable=False)

        params = {
            "key": self.api_key,
            "cx": self.cx,
            "q": query,
            "num": self.config.RESULTS_PER_QUERY,
        }

        try:
            response = await self._get(params)
        except httpx.RequestError as e:
            logger.error("Google Custom Search request error: %s", str(e))
            raise SearchException("Unable to reach Google Custom Search API.") from e

        if not response.is_success:
            message = "Google Custom Search API returned an error."
            try:
                message = response.json().get("error", {}).get("message") or message
            except (ValueError, AttributeError):
                pass
            logger.error("Google Custom Search HTTP error %s: %s", response.status_code, message)
            raise SearchException(message, status_code=response.status_code)

        try:
            items = response.json().get("items", []) or []
        except (ValueError, AttributeError) as e:
            raise SearchException("Google Custom Search API returned an unreadable body.") from e

        hits = [to_search_hit(item) for item in items if isinstance(item, dict)]
        logger.info("Google Custom Search returned %d hits for %r", len(hits), query[:80])
        return hits

    async def _get(self, params: Dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self.config.ENDPOINT, params=params)
        async with httpx.AsyncClient(timeout=self.config.REQUEST_TIMEOUT, verify=self.verify_ssl) as client:
            return await client.get(self.config.ENDPOINT, params=params)
