from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class ScraperConfig:
    """Limits applied while fetching and cleaning article pages."""
    REQUEST_TIMEOUT: float = 10.0
    MAX_CONTENT_LENGTH: int = 3000
    MAX_HTML_LENGTH: int = 2_000_000
    MIN_PARAGRAPH_LENGTH: int = 50
    MAX_CONCURRENT_FETCHES: int = 3
    DEFAULT_LIMIT: int = 3
    MAX_CANDIDATE_URLS: int = 5
    TRUNCATION_MARKER: str = "..."
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    ACCEPT: str = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
    ACCEPT_LANGUAGE: str = "id-ID,id;q=0.9,en-US;q=0.8,en;q=0.7"

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.USER_AGENT,
            "Accept": self.ACCEPT,
            "Accept-Language": self.ACCEPT_LANGUAGE,
        }


@dataclass(frozen=True)
class PromptConfig:
    MAX_SNIPPET_LENGTH: int = 400
    MAX_ARTICLE_LENGTH: int = 2000
    MAX_FULL_ARTICLES: int = 3


@dataclass(frozen=True)
class LLMConfig:
    REQUEST_TIMEOUT: float = 30.0
    TEMPERATURE: float = 0.1
    TOP_K: int = 1
    TOP_P: float = 1.0
    MAX_OUTPUT_TOKENS: int = 1024
    SAFETY_THRESHOLD: str = "BLOCK_MEDIUM_AND_ABOVE"
    HARM_CATEGORIES: Tuple[str, ...] = (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
    MIN_API_KEY_LENGTH: int = 20
    MAX_FREE_TEXT_EXPLANATION: int = 200
    MAX_FREE_TEXT_ANALYSIS: int = 500
    MAX_SOURCES_USED: int = 5
    SOURCE_NAME: str = "Gemini AI"


@dataclass(frozen=True)
class HeuristicConfig:
    MIN_KEYWORD_LENGTH: int = 4
    MIN_KEYWORD_MATCHES: int = 2
    HIGH_CONFIDENCE_HITS: int = 4
    MEDIUM_CONFIDENCE_HITS: int = 2
    VALIDATED_MIN_HITS: int = 3
    ARTICLE_CONTEXT_LENGTH: int = 300
    SNIPPET_CONTEXT_LENGTH: int = 200
    KEY_POINT_LENGTH: int = 180
    MAX_REFERENCES: int = 3


@dataclass(frozen=True)
class SearchConfig:
    ENDPOINT: str = "https://www.googleapis.com/customsearch/v1"
    RESULTS_PER_QUERY: int = 10
    REQUEST_TIMEOUT: float = 15.0
    MIN_QUERY_LENGTH: int = 3
    MAX_QUERY_LENGTH: int = 255


# Hosts that block automated fetches or carry no article markup.
BLOCKED_SCRAPE_DOMAINS: Tuple[str, ...] = (
    "facebook.com",
    "twitter.com",
    "x.com",
    "instagram.com",
    "tiktok.com",
    "youtube.com",
    "linkedin.com",
)

BOILERPLATE_PHRASES: Tuple[str, ...] = (
    "Baca juga:",
    "Simak juga:",
    "Loading...",
    "Advertisement",
    "Related articles",
    "Artikel terkait",
)

HOAX_MARKERS: Tuple[str, ...] = ("hoaks", "tidak benar", "salah", "palsu")

OFFICIAL_DOMAIN_SUFFIXES: Tuple[str, ...] = (".go.id", ".gov")

# keyword found in hit text -> display name
PLATFORM_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("tiktok", "TikTok"),
    ("facebook", "Facebook"),
    ("instagram", "Instagram"),
    ("twitter", "Twitter"),
    ("whatsapp", "WhatsApp"),
    ("youtube", "YouTube"),
)

# domain -> platform name used in "postingan di <platform>"
PLATFORM_DOMAIN_NAMES: Tuple[Tuple[str, str], ...] = (
    ("instagram.com", "Instagram"),
    ("facebook.com", "Facebook"),
    ("fb.com", "Facebook"),
    ("twitter.com", "X"),
    ("x.com", "X"),
    ("youtube.com", "YouTube"),
    ("youtu.be", "YouTube"),
    ("reddit.com", "Reddit"),
    ("tiktok.com", "TikTok"),
    ("linkedin.com", "LinkedIn"),
    ("threads.net", "Threads"),
)

SCRAPER_CONFIG = ScraperConfig()
PROMPT_CONFIG = PromptConfig()
LLM_CONFIG = LLMConfig()
HEURISTIC_CONFIG = HeuristicConfig()
SEARCH_CONFIG = SearchConfig()
