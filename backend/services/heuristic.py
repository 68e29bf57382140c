from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from config import logger
from config.constants import (
    HEURISTIC_CONFIG,
    SCRAPER_CONFIG,
    HeuristicConfig,
    HOAX_MARKERS,
    OFFICIAL_DOMAIN_SUFFIXES,
    PLATFORM_KEYWORDS,
)
from models.sources import SearchHit, ScrapedArticle
from models.verdicts import ClaimVerdict, Confidence, Verdict
from utils.text import preview
from utils.url import extract_host

DEFAULT_CONTEXT = "topik yang sedang dibicarakan publik"


@dataclass
class EvidenceSignals:
    """What the search hits and scraped pages say, reduced to a few countable signals."""
    relevant_count: int = 0
    is_hoax: bool = False
    is_official: bool = False
    platforms: List[str] = field(default_factory=list)
    context_snippets: List[str] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    relevant_domains: List[str] = field(default_factory=list)


def claim_keywords(claim: str, config: HeuristicConfig = HEURISTIC_CONFIG) -> List[str]:
    return [token for token in claim.lower().split() if len(token) >= config.MIN_KEYWORD_LENGTH]


def contains_hoax_marker(text: str) -> bool:
    text = text.lower()
    return any(marker in text for marker in HOAX_MARKERS)


def is_official_domain(domain: str) -> bool:
    domain = (domain or "").lower().rstrip(".")
    return any(domain.endswith(suffix) for suffix in OFFICIAL_DOMAIN_SUFFIXES)


def confidence_for(relevant_count: int, config: HeuristicConfig = HEURISTIC_CONFIG) -> Confidence:
    if relevant_count >= config.HIGH_CONFIDENCE_HITS:
        return Confidence.HIGH
    if relevant_count >= config.MEDIUM_CONFIDENCE_HITS:
        return Confidence.MEDIUM
    return Confidence.LOW


def verdict_for(signals: EvidenceSignals, config: HeuristicConfig = HEURISTIC_CONFIG) -> Verdict:
    # A hoax marker wins over official/validating signals.
    if signals.is_hoax:
        return Verdict.REFUTED
    if signals.relevant_count >= config.VALIDATED_MIN_HITS and signals.is_official:
        return Verdict.VALIDATED
    return Verdict.NEEDS_VERIFICATION


class HeuristicSynthesizer:
    """
    Produces a verdict from search metadata and scraped text alone.
    Used whenever the Gemini path is disabled, misconfigured, unreachable or unusable,
    and never fails: an empty hit list still yields a generic NeedsVerification verdict.
    """

    def __init__(
        self,
        scraper=None,
        config: HeuristicConfig = HEURISTIC_CONFIG,
        scrape_limit: int = SCRAPER_CONFIG.DEFAULT_LIMIT,
    ):
        self.scraper = scraper
        self.config = config
        self.scrape_limit = scrape_limit

    async def synthesize(
        self,
        claim: str,
        search_hits: Sequence[SearchHit],
        scraped_articles: Optional[Sequence[ScrapedArticle]] = None,
    ) -> ClaimVerdict:
        if not isinstance(claim, str):
            raise TypeError(f"claim must be a string, got {type(claim).__name__}")

        if scraped_articles is None:
            scraped_articles = await self._scrape(search_hits)
        articles = list(scraped_articles)

        signals = self.collect_signals(claim, search_hits, articles)
        confidence = confidence_for(signals.relevant_count, self.config)
        verdict = verdict_for(signals, self.config)
        logger.info(
            "Heuristic verdict: %s/%s (relevant=%d, hoax=%s, official=%s, articles=%d)",
            verdict.value, confidence.value, signals.relevant_count,
            signals.is_hoax, signals.is_official, len(articles),
        )

        return ClaimVerdict(
            success=True,
            verdict=verdict,
            confidence=confidence,
            explanation=self.build_explanation(claim, signals, articles),
            analysis=self.build_analysis(verdict, confidence, signals, articles),
            sources_used=signals.relevant_domains,
            claim=claim,
        )

    async def _scrape(self, search_hits: Sequence[SearchHit]) -> List[ScrapedArticle]:
        if self.scraper is None or not search_hits:
            return []
        urls = [hit.link for hit in search_hits[:SCRAPER_CONFIG.MAX_CANDIDATE_URLS] if hit.link]
        try:
            articles = await self.scraper.scrape_multiple(urls, self.scrape_limit)
        except Exception:
            logger.exception("Fallback: scraping raised, using snippets only.")
            return []
        logger.info("Fallback: scraped %d articles", len(articles))
        return articles

    def collect_signals(
        self,
        claim: str,
        search_hits: Sequence[SearchHit],
        articles: Sequence[ScrapedArticle],
    ) -> EvidenceSignals:
        signals = EvidenceSignals()
        keywords = claim_keywords(claim, self.config)

        for hit in search_hits:
            text = hit.text.lower()

            for keyword, name in PLATFORM_KEYWORDS:
                if keyword in text and name not in signals.platforms:
                    signals.platforms.append(name)

            matches = sum(1 for keyword in keywords if keyword in text)
            if matches >= self.config.MIN_KEYWORD_MATCHES:
                signals.relevant_count += 1
                if hit.snippet:
                    signals.context_snippets.append(hit.snippet)
                reference = f'**{hit.display_domain}** melaporkan: "{hit.title}"'
                if reference not in signals.references:
                    signals.references.append(reference)
                if hit.display_domain and hit.display_domain not in signals.relevant_domains:
                    signals.relevant_domains.append(hit.display_domain)

            if contains_hoax_marker(text):
                signals.is_hoax = True
            if is_official_domain(hit.display_domain):
                signals.is_official = True

        for article in articles:
            if contains_hoax_marker(article.content):
                signals.is_hoax = True

        return signals

    def real_context(self, signals: EvidenceSignals, articles: Sequence[ScrapedArticle]) -> str:
        if articles:
            return preview(articles[0].content, self.config.ARTICLE_CONTEXT_LENGTH)
        if signals.context_snippets:
            return preview(signals.context_snippets[0], self.config.SNIPPET_CONTEXT_LENGTH)
        return DEFAULT_CONTEXT

    def build_explanation(self, claim: str, signals: EvidenceSignals, articles: Sequence[ScrapedArticle]) -> str:
        platform_text = (
            "di platform " + ", ".join(signals.platforms) if signals.platforms else "di media sosial"
        )

        explanation = f'**Analisa Klaim**: Isu mengenai "{claim}" ditemukan di berbagai sumber informasi.\n\n'
        explanation += f"**Konteks**: Narasi ini terpantau menyebar {platform_text} dan menarik perhatian publik secara luas.\n\n"

        if signals.is_hoax:
            explanation += (
                "**Hasil Verifikasi**: Ditemukan indikasi kuat berupa bantahan atau pelabelan sebagai informasi "
                "**HOAKS/SALAH** dari sumber kredibel. Detil artikel menunjukkan ketidaksesuaian klaim dengan fakta di lapangan."
            )
        else:
            explanation += (
                "**Hasil Verifikasi**: Saat ini belum ditemukan klarifikasi resmi yang mutlak, "
                f"namun data menunjukkan relevansi dengan: {self.real_context(signals, articles)}"
            )
        return explanation

    def build_analysis(
        self,
        verdict: Verdict,
        confidence: Confidence,
        signals: EvidenceSignals,
        articles: Sequence[ScrapedArticle],
    ) -> str:
        analysis = "### Ringkasan Verifikasi Data\n\n"
        analysis += (
            f"Status **{verdict.value}** ditetapkan berdasarkan penelusuran terhadap {len(articles)} artikel mendalam "
            f"dan {signals.relevant_count} rujukan data terkait. "
        )
        if signals.relevant_count >= self.config.HIGH_CONFIDENCE_HITS:
            reason = "adanya konsistensi informasi yang kuat dari berbagai sumber kredibel."
        else:
            reason = "sumber informasi masih bersifat terbatas atau dalam tahap verifikasi lanjut."
        analysis += f"Tingkat kepercayaan **{confidence.value}** diberikan karena {reason}"

        if articles:
            analysis += "\n\n### Poin Kunci dari Artikel Terkait\n"
            for article in articles:
                host = extract_host(article.url) or article.url
                analysis += f"- **{host}**: {preview(article.content, self.config.KEY_POINT_LENGTH)}\n"

        if signals.references:
            analysis += "\n### Referensi Tambahan\n"
            for reference in signals.references[:self.config.MAX_REFERENCES]:
                analysis += f"- {reference}\n"

        return analysis
