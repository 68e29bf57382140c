from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional

import httpx

from config import logger, mask_key
from config.constants import LLM_CONFIG, LLMConfig

DEFAULT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"


class GenerationOutcome(str, Enum):
    SUCCESS = "success"
    BLOCKED = "blocked"
    EMPTY = "empty"
    UNREACHABLE = "unreachable"
    SERVER_ERROR = "server_error"
    DISABLED = "disabled"


@dataclass(frozen=True)
class GenerationResult:
    outcome: GenerationOutcome
    text: str = ""
    block_reason: Optional[str] = None
    status_code: Optional[int] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == GenerationOutcome.SUCCESS


def extract_candidate_text(data: Any) -> str:
    """Pull candidates[0].content.parts[0].text out of a generateContent payload."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


def extract_block_reason(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    feedback = data.get("promptFeedback") or {}
    reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
    return str(reason) if reason else None


class GeminiClient:
    """Single-shot Gemini generateContent caller. Failures come back as outcomes, never exceptions."""

    def __init__(
        self,
        api_key: str,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = None,
        client: Optional[httpx.AsyncClient] = None,
        config: LLMConfig = LLM_CONFIG,
    ):
        self.api_key = api_key or ""
        self.endpoint = endpoint
        self.config = config
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self._client = client

    @property
    def is_configured(self) -> bool:
        return len(self.api_key) >= self.config.MIN_API_KEY_LENGTH

    def build_body(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.config.TEMPERATURE,
                "topK": self.config.TOP_K,
                "topP": self.config.TOP_P,
                "maxOutputTokens": self.config.MAX_OUTPUT_TOKENS,
            },
            "safetySettings": [
                {"category": category, "threshold": self.config.SAFETY_THRESHOLD}
                for category in self.config.HARM_CATEGORIES
            ],
        }

    async def generate(self, prompt: str) -> GenerationResult:
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        body = self.build_body(prompt)
        logger.info("Sending request to Gemini API (key %s)...", mask_key(self.api_key))

        try:
            response = await self._post(headers, body)
        except httpx.TimeoutException as e:
            logger.warning("Gemini API timed out after %.1fs: %s", self.timeout, e)
            return GenerationResult(GenerationOutcome.UNREACHABLE, detail="timeout")
        except httpx.RequestError as e:
            logger.warning("Gemini API unreachable: %s", str(e))
            return GenerationResult(GenerationOutcome.UNREACHABLE, detail=str(e))

        logger.info("Gemini API response status: %s", response.status_code)
        if not response.is_success:
            logger.error("Gemini HTTP error %s: %s", response.status_code, response.text[:500])
            return GenerationResult(
                GenerationOutcome.SERVER_ERROR,
                status_code=response.status_code,
                detail=f"HTTP {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError:
            logger.error("Gemini API returned a non-JSON body: %s", response.text[:500])
            return GenerationResult(GenerationOutcome.EMPTY, status_code=response.status_code)

        text = extract_candidate_text(data)
        if not text.strip():
            block_reason = extract_block_reason(data)
            feedback = data.get("promptFeedback") if isinstance(data, dict) else None
            logger.error(
                "Gemini API returned no analysable candidates (blockReason=%s, safetyRatings=%s).",
                block_reason,
                feedback.get("safetyRatings") if isinstance(feedback, dict) else None,
            )
            outcome = GenerationOutcome.BLOCKED if block_reason else GenerationOutcome.EMPTY
            return GenerationResult(outcome, block_reason=block_reason, status_code=response.status_code)

        return GenerationResult(GenerationOutcome.SUCCESS, text=text, status_code=response.status_code)

    async def _post(self, headers: Dict[str, str], body: Dict[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.endpoint, headers=headers, json=body, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.endpoint, headers=headers, json=body)
