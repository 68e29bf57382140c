import re
from typing import Any, Dict, List, Optional

from config import logger
from config.constants import LLM_CONFIG, PLATFORM_DOMAIN_NAMES, LLMConfig
from models.verdicts import ClaimVerdict, Confidence, Verdict
from utils.parsing import strip_markdown, locate_json_span, parse_json_object
from utils.text import truncate

NO_EXPLANATION = "Tidak dapat menganalisis klaim ini dengan pasti."
NO_ANALYSIS = "Tidak ada analisis tersedia"
BLOCKED_EXPLANATION = "Analisis diblokir oleh Gemini AI."
EMPTY_EXPLANATION = "Gemini AI tidak mengembalikan analisis."
BLOCKED_ERROR = "Gemini AI memblokir analisis: {reason}"

_PLATFORM_PATTERNS = [
    (re.compile(r"\b(?:https?://)?(?:www\.)?" + re.escape(domain) + r"\b", re.IGNORECASE), f"postingan di {name}")
    for domain, name in PLATFORM_DOMAIN_NAMES
]
_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def normalize_platform_mentions(text: str) -> str:
    """Replace social-platform domains with a readable "postingan di <Platform>" phrase."""
    for pattern, replacement in _PLATFORM_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def _as_source_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    if isinstance(value, (list, tuple)):
        return [str(s).strip() for s in value if s is not None and str(s).strip()]
    return [str(value)]


class ResponseInterpreter:
    """Turns raw Gemini text, however mangled, into a ClaimVerdict."""

    def __init__(self, config: LLMConfig = LLM_CONFIG):
        self.config = config

    def interpret(self, raw_text: str, claim: str) -> ClaimVerdict:
        logger.info("Gemini raw response: %s", (raw_text or "")[:500])
        clean_text = strip_markdown(raw_text)

        candidate = locate_json_span(clean_text)
        if candidate is None:
            logger.warning("No JSON found in Gemini response; parsing as free text.")
            return self.parse_text_response(clean_text, claim)

        data, repaired = parse_json_object(candidate)
        if data is None:
            logger.warning("Gemini JSON unparseable%s; parsing as free text.", " after repair" if repaired else "")
            return self.parse_text_response(clean_text, claim)

        verdict = self.from_json(data, claim)
        if verdict is None:
            logger.warning("Gemini JSON parsed but missing explanation field.")
            return self.parse_text_response(clean_text, claim)
        return verdict

    def from_json(self, data: Dict[str, Any], claim: str) -> Optional[ClaimVerdict]:
        explanation = data.get("explanation")
        if explanation is None or not str(explanation).strip():
            return None

        analysis = data.get("analysis")
        analysis = str(analysis) if analysis is not None and str(analysis).strip() else NO_ANALYSIS

        logger.info("Successfully parsed JSON response.")
        return ClaimVerdict(
            success=True,
            verdict=Verdict.from_label(data.get("verdict")),
            confidence=Confidence.from_label(data.get("confidence")),
            explanation=normalize_platform_mentions(str(explanation).strip()),
            analysis=normalize_platform_mentions(analysis),
            sources_used=_as_source_list(data.get("sources_used")),
            claim=claim,
        )

    def parse_text_response(self, text: str, claim: str) -> ClaimVerdict:
        """Last-resort reading of an unstructured answer; still a partial success."""
        explanation = NO_EXPLANATION
        analysis = NO_ANALYSIS

        if text:
            first_sentence = _SENTENCE_SPLIT.split(text)[0].strip()
            if first_sentence:
                explanation = truncate(first_sentence, self.config.MAX_FREE_TEXT_EXPLANATION)
            analysis = truncate(text, self.config.MAX_FREE_TEXT_ANALYSIS)

        return ClaimVerdict(
            success=True,
            verdict=Verdict.NEEDS_VERIFICATION,
            confidence=Confidence.LOW,
            explanation=explanation,
            analysis=analysis,
            sources_used=[],
            claim=claim,
        )

    def blocked(self, claim: str, block_reason: Optional[str] = None) -> ClaimVerdict:
        """Hard failure: the model blocked the prompt or produced no candidate text."""
        if block_reason:
            explanation = BLOCKED_EXPLANATION
            error = BLOCKED_ERROR.format(reason=block_reason)
        else:
            explanation = EMPTY_EXPLANATION
            error = EMPTY_EXPLANATION
        return ClaimVerdict(
            success=False,
            verdict=Verdict.NEEDS_VERIFICATION,
            confidence=Confidence.LOW,
            explanation=explanation,
            analysis="",
            sources_used=[self.config.SOURCE_NAME],
            claim=claim,
            error=error,
        )
