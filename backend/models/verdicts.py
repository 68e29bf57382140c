from enum import Enum
from typing import List, Optional, Any
from pydantic import BaseModel, Field, computed_field, field_validator

from config import logger
from config.constants import LLM_CONFIG


class Verdict(str, Enum):
    VALIDATED = "Tervalidasi"
    REFUTED = "Terbantah"
    NEEDS_VERIFICATION = "Perlu Verifikasi"

    @classmethod
    def from_label(cls, label: Any) -> "Verdict":
        """Map a raw model literal onto the closed verdict set."""
        key = _normalize_label(label)
        verdict = _VERDICT_ALIASES.get(key)
        if verdict is None:
            logger.warning("Unrecognized verdict literal %r. Defaulting to %s.", label, cls.NEEDS_VERIFICATION.value)
            return cls.NEEDS_VERIFICATION
        return verdict


class Confidence(str, Enum):
    HIGH = "Tinggi"
    MEDIUM = "Sedang"
    LOW = "Rendah"

    @classmethod
    def from_label(cls, label: Any) -> "Confidence":
        key = _normalize_label(label)
        confidence = _CONFIDENCE_ALIASES.get(key)
        if confidence is None:
            logger.warning("Unrecognized confidence literal %r. Defaulting to %s.", label, cls.LOW.value)
            return cls.LOW
        return confidence


def _normalize_label(label: Any) -> str:
    if label is None:
        return ""
    return " ".join(str(label).replace("_", " ").replace("-", " ").lower().split())


_VERDICT_ALIASES = {
    "tervalidasi": Verdict.VALIDATED,
    "valid": Verdict.VALIDATED,
    "validated": Verdict.VALIDATED,
    "benar": Verdict.VALIDATED,
    "terbantah": Verdict.REFUTED,
    "refuted": Verdict.REFUTED,
    "hoaks": Verdict.REFUTED,
    "perlu verifikasi": Verdict.NEEDS_VERIFICATION,
    "memerlukan verifikasi": Verdict.NEEDS_VERIFICATION,
    "needs verification": Verdict.NEEDS_VERIFICATION,
    "needsverification": Verdict.NEEDS_VERIFICATION,
}

_CONFIDENCE_ALIASES = {
    "tinggi": Confidence.HIGH,
    "high": Confidence.HIGH,
    "sedang": Confidence.MEDIUM,
    "medium": Confidence.MEDIUM,
    "rendah": Confidence.LOW,
    "low": Confidence.LOW,
}


class ClaimVerdict(BaseModel):
    """The single output shape of the verification pipeline, whichever path produced it."""
    success: bool = True
    verdict: Verdict = Verdict.NEEDS_VERIFICATION
    confidence: Confidence = Confidence.LOW
    explanation: str = Field(..., min_length=1)
    analysis: str = ""
    sources_used: List[str] = Field(default_factory=list)
    claim: str
    error: Optional[str] = None

    @field_validator("sources_used", mode="before")
    @classmethod
    def _unique_sources(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        seen: List[str] = []
        for item in v:
            name = str(item).strip()
            if name and name not in seen:
                seen.append(name)
        return seen[:LLM_CONFIG.MAX_SOURCES_USED]

    @computed_field
    @property
    def sources(self) -> str:
        return ", ".join(self.sources_used)
