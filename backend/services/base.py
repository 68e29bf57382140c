from typing import List, Protocol, Sequence

from models.sources import SearchHit, ScrapedArticle
from .llm import GenerationResult


class SearchClient(Protocol):
    """Interface for the web-search collaborator."""

    async def search(self, query: str) -> List[SearchHit]:
        """Return hits in ranking order; raises SearchException on upstream or credential errors."""
        ...


class TextGenerator(Protocol):
    """Interface for the generative-model collaborator."""

    @property
    def is_configured(self) -> bool:
        ...

    async def generate(self, prompt: str) -> GenerationResult:
        ...


class ArticleScraper(Protocol):
    """Interface for batch article scraping."""

    async def scrape_multiple(self, urls: Sequence[str], limit: int = 3) -> List[ScrapedArticle]:
        ...
