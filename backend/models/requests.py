from typing import List, Optional
from pydantic import BaseModel, Field, computed_field, field_validator

from .sources import SearchHit
from .verdicts import ClaimVerdict


class SearchRequest(BaseModel):
    """Request body for /search with validation."""
    query: str = Field(..., min_length=3, max_length=255)

    @field_validator('query')
    @classmethod
    def sanitize_query(cls, v):
        from utils.validation import InputValidator

        return InputValidator.sanitize_query(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "query": "Vaksin X menyebabkan magnet"
            }
        }
    }


class SearchResponse(BaseModel):
    """Complete response from /search."""
    query: str
    results: List[SearchHit]
    analysis: ClaimVerdict
    fallback: bool
    message: Optional[str] = None

    @computed_field
    @property
    def gemini_analysis(self) -> ClaimVerdict:
        """The verdict again under the key the web client reads."""
        return self.analysis
