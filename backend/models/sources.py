from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from config.constants import SCRAPER_CONFIG


class SearchHit(BaseModel):
    """One web-search result entry, consumed read-only by the pipeline."""
    model_config = ConfigDict(frozen=True)

    title: str = ""
    snippet: str = ""
    link: str = ""
    display_domain: str = ""
    formatted_url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @field_validator("title", "snippet", "link", "display_domain", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    # Custom Search field names, as the web client reads them.
    @computed_field
    @property
    def displayLink(self) -> str:
        return self.display_domain

    @computed_field
    @property
    def thumbnail(self) -> Optional[str]:
        return self.thumbnail_url

    @property
    def text(self) -> str:
        """Title and snippet joined, the text the heuristics look at."""
        return f"{self.title} {self.snippet}"


class ScrapedArticle(BaseModel):
    """Cleaned, truncated article text extracted from one URL."""
    url: str
    title: str = ""
    content: str = Field(..., min_length=1, max_length=SCRAPER_CONFIG.MAX_CONTENT_LENGTH)
    published_date: str = ""
    author: str = ""
    word_count: int = 0
