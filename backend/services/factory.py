"""Factory functions to create the pipeline from configuration."""

from api.search import GoogleSearchClient
from config import Settings
from .analyzer import ClaimAnalyzer
from .heuristic import HeuristicSynthesizer
from .interpreter import ResponseInterpreter
from .llm import GeminiClient
from .prompt import PromptComposer
from .scraper import ContentExtractor, SourceScraper


def build_analyzer(settings: Settings) -> ClaimAnalyzer:
    """Wire every pipeline component from settings; nothing below reads the environment."""
    scraper = SourceScraper(ContentExtractor(timeout=settings.SCRAPE_TIMEOUT))
    return ClaimAnalyzer(
        generator=GeminiClient(
            api_key=settings.GEMINI_API_KEY,
            endpoint=settings.GEMINI_ENDPOINT,
            timeout=settings.GEMINI_TIMEOUT,
        ),
        scraper=scraper,
        search_client=GoogleSearchClient(
            api_key=settings.GOOGLE_CSE_KEY,
            cx=settings.GOOGLE_CSE_CX,
            verify_ssl=settings.GOOGLE_CSE_VERIFY_SSL,
        ),
        composer=PromptComposer(),
        interpreter=ResponseInterpreter(),
        heuristic=HeuristicSynthesizer(scraper, scrape_limit=settings.SCRAPE_LIMIT),
        enabled=settings.GEMINI_ENABLED,
        scrape_limit=settings.SCRAPE_LIMIT,
    )
