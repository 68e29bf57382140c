from .sources import (
    SearchHit,
    ScrapedArticle,
)
from .verdicts import (
    Verdict,
    Confidence,
    ClaimVerdict,
)
from .requests import (
    SearchRequest,
    SearchResponse,
)

__all__ = [
    "SearchHit",
    "ScrapedArticle",

    "Verdict",
    "Confidence",
    "ClaimVerdict",

    "SearchRequest",
    "SearchResponse",
]
