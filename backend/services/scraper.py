import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence

import httpx
from bs4 import BeautifulSoup

from config import logger
from config.constants import (
    SCRAPER_CONFIG,
    ScraperConfig,
    BLOCKED_SCRAPE_DOMAINS,
    BOILERPLATE_PHRASES,
)
from models.sources import ScrapedArticle
from utils.text import collapse_whitespace, remove_phrases, truncate
from utils.url import extract_host, host_matches


class SelectorRule(NamedTuple):
    """A CSS selector plus the attribute to read; text content is used when the attribute is empty."""
    selector: str
    attribute: Optional[str] = None


# Ordered from site-template article bodies down to any paragraph on the page.
CONTENT_SELECTORS = (
    "article .content",
    "article .post-content",
    "article .entry-content",
    "article .article-content",
    "article .article-body",
    ".article-content",
    ".post-content",
    ".entry-content",
    ".content-article",
    ".detail-content",
    ".detail__body-text",
    ".read__content",
    "article p",
    "main p",
    ".content p",
    "body p",
)

TITLE_RULES = (
    SelectorRule('meta[property="og:title"]', "content"),
    SelectorRule("h1.title"),
    SelectorRule("h1.post-title"),
    SelectorRule("h1.article-title"),
    SelectorRule("h1.entry-title"),
    SelectorRule(".article-title"),
    SelectorRule("article h1"),
    SelectorRule("h1"),
    SelectorRule("title"),
)

DATE_RULES = (
    SelectorRule('meta[property="article:published_time"]', "content"),
    SelectorRule('meta[name="pubdate"]', "content"),
    SelectorRule("time[datetime]", "datetime"),
    SelectorRule(".date"),
    SelectorRule(".publish-date"),
    SelectorRule(".article-date"),
    SelectorRule(".post-date"),
)

AUTHOR_RULES = (
    SelectorRule('meta[name="author"]', "content"),
    SelectorRule(".author"),
    SelectorRule(".author-name"),
    SelectorRule(".byline"),
    SelectorRule('[rel="author"]'),
)

_NON_CONTENT_TAGS = ("script", "style", "noscript", "template")


class FetchError(str, Enum):
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    NO_CONTENT = "no_content"
    PARSE = "parse"


@dataclass(frozen=True)
class FetchResult:
    url: str
    article: Optional[ScrapedArticle] = None
    error: Optional[FetchError] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.article is not None


def first_match(soup: BeautifulSoup, rules: Sequence[SelectorRule]) -> str:
    """Walk rules by specificity and return the first non-empty value."""
    for rule in rules:
        node = soup.select_one(rule.selector)
        if node is None:
            continue
        value = node.get(rule.attribute) if rule.attribute else None
        if not value:
            value = node.get_text(" ", strip=True)
        value = collapse_whitespace(value)
        if value:
            return value
    return ""


def extract_main_content(soup: BeautifulSoup, config: ScraperConfig = SCRAPER_CONFIG) -> str:
    """
    Join the substantial paragraphs of the first selector that yields any.
    Returns "" when no selector in the cascade matches.
    """
    for selector in CONTENT_SELECTORS:
        paragraphs = []
        for node in soup.select(selector):
            text = node.get_text(" ", strip=True)
            if len(text) > config.MIN_PARAGRAPH_LENGTH:
                paragraphs.append(text)
        if paragraphs:
            return "\n\n".join(paragraphs)
    return ""


def clean_text(text: str, config: ScraperConfig = SCRAPER_CONFIG) -> str:
    text = collapse_whitespace(text)
    text = collapse_whitespace(remove_phrases(text, BOILERPLATE_PHRASES))
    return truncate(text, config.MAX_CONTENT_LENGTH, config.TRUNCATION_MARKER)


def parse_article(html: str, url: str, config: ScraperConfig = SCRAPER_CONFIG) -> Optional[ScrapedArticle]:
    """Extract a cleaned article from raw markup, or None when there is no usable body."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()

    content = clean_text(extract_main_content(soup, config), config)
    if not content:
        return None

    return ScrapedArticle(
        url=url,
        title=first_match(soup, TITLE_RULES),
        content=content,
        published_date=first_match(soup, DATE_RULES),
        author=first_match(soup, AUTHOR_RULES),
        word_count=len(content.split()),
    )


class ContentExtractor:
    """Fetches one URL and turns it into a ScrapedArticle."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = None,
        config: ScraperConfig = SCRAPER_CONFIG,
    ):
        self._client = client
        self.config = config
        self.timeout = timeout or config.REQUEST_TIMEOUT

    async def fetch(self, url: str) -> FetchResult:
        try:
            response = await asyncio.wait_for(self._get(url), timeout=self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning("Scraper: timed out fetching %s after %.1fs", url, self.timeout)
            return FetchResult(url, error=FetchError.TIMEOUT)
        except httpx.HTTPError as e:
            logger.warning("Scraper: request error for %s: %s", url, e)
            return FetchResult(url, error=FetchError.NETWORK)
        except Exception as e:
            logger.error("Scraper: unexpected error fetching %s: %s", url, e)
            return FetchResult(url, error=FetchError.NETWORK)

        if not response.is_success:
            logger.warning("Scraper: failed to fetch %s - status %s", url, response.status_code)
            return FetchResult(url, error=FetchError.HTTP_STATUS, status_code=response.status_code)

        try:
            html = response.text[:self.config.MAX_HTML_LENGTH]
            article = await asyncio.to_thread(parse_article, html, url, self.config)
        except Exception as e:
            logger.error("Scraper: error parsing %s: %s", url, e)
            return FetchResult(url, error=FetchError.PARSE, status_code=response.status_code)

        if article is None:
            logger.info("Scraper: no content extracted from %s", url)
            return FetchResult(url, error=FetchError.NO_CONTENT, status_code=response.status_code)

        return FetchResult(url, article=article, status_code=response.status_code)

    async def extract(self, url: str) -> Optional[ScrapedArticle]:
        return (await self.fetch(url)).article

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, headers=self.config.headers, follow_redirects=True)
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self.config.headers,
            follow_redirects=True,
        ) as client:
            return await client.get(url)


class SourceScraper:
    """Runs the extractor over candidate URLs, keeping URL order and a success-count limit."""

    def __init__(
        self,
        extractor: ContentExtractor = None,
        max_concurrency: int = None,
        blocked_domains: Sequence[str] = BLOCKED_SCRAPE_DOMAINS,
    ):
        self.extractor = extractor or ContentExtractor()
        self.max_concurrency = max(1, max_concurrency or SCRAPER_CONFIG.MAX_CONCURRENT_FETCHES)
        self.blocked_domains = tuple(blocked_domains)

    def should_skip(self, url: str) -> bool:
        host = extract_host(url)
        return not host or host_matches(host, self.blocked_domains)

    async def scrape_multiple(self, urls: Sequence[str], limit: int = SCRAPER_CONFIG.DEFAULT_LIMIT) -> List[ScrapedArticle]:
        if limit <= 0:
            return []

        candidates = []
        for url in urls:
            if not url:
                continue
            if self.should_skip(url):
                logger.info("Scraper: skipping blocked or invalid URL %s", url)
                continue
            candidates.append(url)

        articles: List[ScrapedArticle] = []
        index = 0
        # Each window never asks for more pages than are still needed, so the
        # first `limit` successes in URL order are exactly what is kept.
        while index < len(candidates) and len(articles) < limit:
            window = min(self.max_concurrency, limit - len(articles))
            batch = candidates[index:index + window]
            index += window

            results = await asyncio.gather(
                *(self.extractor.fetch(url) for url in batch),
                return_exceptions=True,
            )
            for url, result in zip(batch, results):
                if isinstance(result, BaseException):
                    logger.error("Scraper: fetch task for %s failed: %s", url, result)
                    continue
                if result.ok:
                    articles.append(result.article)

        logger.info("Scraper: scraped %d of %d candidate URLs", len(articles), len(candidates))
        return articles
