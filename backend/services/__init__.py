from .llm import GeminiClient, GenerationOutcome, GenerationResult
from .scraper import ContentExtractor, SourceScraper, FetchError, FetchResult, parse_article
from .prompt import PromptComposer
from .interpreter import ResponseInterpreter, normalize_platform_mentions
from .heuristic import HeuristicSynthesizer
from .analyzer import ClaimAnalyzer, AnalysisPath, AnalysisOutcome
from .factory import build_analyzer

__all__ = [
    "GeminiClient",
    "GenerationOutcome",
    "GenerationResult",
    "ContentExtractor",
    "SourceScraper",
    "FetchError",
    "FetchResult",
    "parse_article",
    "PromptComposer",
    "ResponseInterpreter",
    "normalize_platform_mentions",
    "HeuristicSynthesizer",
    "ClaimAnalyzer",
    "AnalysisPath",
    "AnalysisOutcome",
    "build_analyzer",
]
