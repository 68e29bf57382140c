from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from config import logger
from config.constants import SCRAPER_CONFIG
from exceptions import SearchException
from models.sources import SearchHit, ScrapedArticle
from models.verdicts import ClaimVerdict
from .base import ArticleScraper, SearchClient, TextGenerator
from .heuristic import HeuristicSynthesizer
from .interpreter import ResponseInterpreter
from .llm import GenerationOutcome, GenerationResult
from .prompt import PromptComposer


class AnalysisPath(str, Enum):
    """Terminal state a single analysis run ended in."""
    SUCCESS = "success"
    DISABLED = "disabled"
    MISCONFIGURED = "misconfigured"
    BLOCKED = "blocked"
    UNREACHABLE = "unreachable"
    SERVER_ERROR = "server_error"
    MALFORMED = "malformed"

    @property
    def used_fallback(self) -> bool:
        return self != AnalysisPath.SUCCESS


_PATH_BY_OUTCOME = {
    GenerationOutcome.BLOCKED: AnalysisPath.BLOCKED,
    GenerationOutcome.EMPTY: AnalysisPath.BLOCKED,
    GenerationOutcome.UNREACHABLE: AnalysisPath.UNREACHABLE,
    GenerationOutcome.SERVER_ERROR: AnalysisPath.SERVER_ERROR,
    GenerationOutcome.DISABLED: AnalysisPath.DISABLED,
}


@dataclass(frozen=True)
class AnalysisOutcome:
    verdict: ClaimVerdict
    path: AnalysisPath


class ClaimAnalyzer:
    """
    Entry point of the verification pipeline.

    Decides between the Gemini path and the heuristic fallback and always
    returns a ClaimVerdict of the same shape. Runs share no mutable state,
    so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        generator: Optional[TextGenerator],
        scraper: ArticleScraper,
        search_client: Optional[SearchClient] = None,
        composer: PromptComposer = None,
        interpreter: ResponseInterpreter = None,
        heuristic: HeuristicSynthesizer = None,
        enabled: bool = True,
        scrape_limit: int = SCRAPER_CONFIG.DEFAULT_LIMIT,
        max_candidate_urls: int = SCRAPER_CONFIG.MAX_CANDIDATE_URLS,
    ):
        self.generator = generator
        self.scraper = scraper
        self.search_client = search_client
        self.composer = composer or PromptComposer()
        self.interpreter = interpreter or ResponseInterpreter()
        self.heuristic = heuristic or HeuristicSynthesizer(scraper, scrape_limit=scrape_limit)
        self.enabled = enabled
        self.scrape_limit = scrape_limit
        self.max_candidate_urls = max_candidate_urls

    async def verify(self, claim: str) -> Tuple[List[SearchHit], ClaimVerdict]:
        """Search for the claim, then analyze it against whatever hits came back."""
        hits = await self.search(claim)
        verdict = await self.analyze(claim, hits)
        return hits, verdict

    async def search(self, claim: str) -> List[SearchHit]:
        if self.search_client is None:
            logger.warning("No search client configured; analyzing without search hits.")
            return []
        try:
            return list(await self.search_client.search(claim))
        except SearchException as e:
            logger.warning("Search failed, continuing without hits: %s", e.message)
            return []

    async def analyze(self, claim: str, search_hits: Sequence[SearchHit]) -> ClaimVerdict:
        return (await self.run(claim, search_hits)).verdict

    async def run(self, claim: str, search_hits: Sequence[SearchHit]) -> AnalysisOutcome:
        if not isinstance(claim, str):
            raise TypeError(f"claim must be a string, got {type(claim).__name__}")
        hits = list(search_hits or [])
        logger.info("Analyzing claim %r with %d search hits", claim[:80], len(hits))

        if not self.enabled:
            logger.warning("Gemini disabled by configuration, using fallback.")
            return await self._fallback(claim, hits, None, AnalysisPath.DISABLED)

        if self.generator is None or not self.generator.is_configured:
            logger.warning("Gemini API key not configured properly, using fallback.")
            return await self._fallback(claim, hits, None, AnalysisPath.MISCONFIGURED)

        articles = await self.scrape(hits)
        prompt = self.composer.compose(claim, hits, articles)
        try:
            result = await self.generator.generate(prompt)
        except Exception:
            logger.exception("Gemini call raised unexpectedly, using fallback.")
            return await self._fallback(claim, hits, articles, AnalysisPath.UNREACHABLE)

        if not result.ok:
            return await self._fallback(claim, hits, articles, _PATH_BY_OUTCOME[result.outcome], result)

        try:
            verdict = self.interpreter.interpret(result.text, claim)
        except (ValueError, TypeError):
            logger.exception("Gemini response could not be interpreted, using fallback.")
            return await self._fallback(claim, hits, articles, AnalysisPath.MALFORMED)

        logger.info("Gemini verdict: %s/%s", verdict.verdict.value, verdict.confidence.value)
        return AnalysisOutcome(verdict, AnalysisPath.SUCCESS)

    async def scrape(self, search_hits: Sequence[SearchHit]) -> List[ScrapedArticle]:
        urls = [hit.link for hit in search_hits[:self.max_candidate_urls] if hit.link]
        if not urls:
            return []
        logger.info("Scraping content from %d URLs...", len(urls))
        try:
            return await self.scraper.scrape_multiple(urls, self.scrape_limit)
        except Exception:
            logger.exception("Scraping raised unexpectedly, continuing without articles.")
            return []

    async def _fallback(
        self,
        claim: str,
        hits: List[SearchHit],
        articles: Optional[List[ScrapedArticle]],
        path: AnalysisPath,
        result: Optional[GenerationResult] = None,
    ) -> AnalysisOutcome:
        if result is not None:
            logger.warning("Gemini call ended in %s (%s), using fallback.", result.outcome.value, result.detail or result.block_reason)
        verdict = await self.heuristic.synthesize(claim, hits, articles)

        if path == AnalysisPath.BLOCKED:
            # Keep the heuristic verdict but surface the block as the visible error.
            blocked = self.interpreter.blocked(claim, result.block_reason if result else None)
            verdict = verdict.model_copy(update={
                "success": blocked.success,
                "explanation": blocked.explanation,
                "sources_used": blocked.sources_used,
                "error": blocked.error,
            })

        return AnalysisOutcome(verdict, path)
