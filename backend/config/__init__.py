import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

from .settings import Settings
from .constants import (
    SCRAPER_CONFIG,
    PROMPT_CONFIG,
    LLM_CONFIG,
    HEURISTIC_CONFIG,
    SEARCH_CONFIG,
)

settings = Settings()


def mask_key(key: str) -> str:
    """Return a log-safe rendering of an API key."""
    if not key:
        return "<empty>"
    return f"{key[:4]}..."


def check_api_keys_on_startup(current: Settings = None) -> list:
    """Warn about missing credentials; the pipeline still runs on its fallback path."""
    current = current or settings
    missing_keys = []
    if not current.GEMINI_API_KEY or len(current.GEMINI_API_KEY) < LLM_CONFIG.MIN_API_KEY_LENGTH:
        missing_keys.append("GEMINI_API_KEY")
    if not current.GOOGLE_CSE_KEY:
        missing_keys.append("GOOGLE_CSE_KEY")
    if not current.GOOGLE_CSE_CX:
        missing_keys.append("GOOGLE_CSE_CX")

    if missing_keys:
        logger.warning(f"Missing or invalid API keys: {', '.join(missing_keys)}")
    else:
        logger.info("All required API keys are configured (Gemini key %s).", mask_key(current.GEMINI_API_KEY))
    if not current.GEMINI_ENABLED:
        logger.warning("Gemini analysis disabled by configuration; heuristic verdicts only.")
    return missing_keys


__all__ = [
    "logger",
    "Settings",
    "settings",
    "mask_key",
    "check_api_keys_on_startup",
    "SCRAPER_CONFIG",
    "PROMPT_CONFIG",
    "LLM_CONFIG",
    "HEURISTIC_CONFIG",
    "SEARCH_CONFIG",
]
