from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from config import logger, settings, check_api_keys_on_startup
from exceptions import ValidationException
from models.requests import SearchRequest, SearchResponse
from services.analyzer import ClaimAnalyzer
from services.factory import build_analyzer
from utils.validation import InputValidator

API_VERSION = "2.0.0"
FALLBACK_MESSAGE = "Google Custom Search tidak tersedia, menampilkan fallback AI."

app = FastAPI(title="Klarifikasi.id API", version=API_VERSION)


@app.on_event("startup")
async def startup_event():
    check_api_keys_on_startup()


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_analyzer: Optional[ClaimAnalyzer] = None


def get_analyzer() -> ClaimAnalyzer:
    global _analyzer
    if _analyzer is None:
        _analyzer = build_analyzer(settings)
    return _analyzer


@app.get("/")
@app.get("/health")
async def health_check():
    return {"status": "ok", "message": "Klarifikasi.id API", "version": API_VERSION}


async def run_search(query: str) -> SearchResponse:
    logger.info(f"Received search request: {query}")
    hits, verdict = await get_analyzer().verify(query)
    return SearchResponse(
        query=query,
        results=hits,
        analysis=verdict,
        fallback=not hits,
        message=None if hits else FALLBACK_MESSAGE,
    )


@app.post("/search", response_model=SearchResponse)
async def search(request: SearchRequest):
    return await run_search(request.query)


@app.get("/search/{query}", response_model=SearchResponse)
async def search_by_path(query: str):
    try:
        clean_query = InputValidator.sanitize_query(query)
    except ValidationException as e:
        raise HTTPException(status_code=422, detail=e.message)
    return await run_search(clean_query)
