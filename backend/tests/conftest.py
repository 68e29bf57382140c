import pytest
import os
import sys
from pathlib import Path
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent))

from models.sources import SearchHit, ScrapedArticle


TEST_ENV = {
    "GEMINI_API_KEY": "test_gemini_key_0123456789",
    "GEMINI_MODEL": "gemini-2.0-flash",
    "GEMINI_ENABLED": "true",
    "GOOGLE_CSE_KEY": "test_cse_key",
    "GOOGLE_CSE_CX": "test_cse_cx",
}


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables before any imports."""
    for key, value in TEST_ENV.items():
        os.environ[key] = value
    yield
    # Cleanup
    for key in TEST_ENV.keys():
        os.environ.pop(key, None)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock all required environment variables."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    return TEST_ENV


@pytest.fixture
def test_client():
    """Create a TestClient for FastAPI app."""
    import main
    return TestClient(main.app)


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.AsyncClient usable as an async context manager."""
    mock_client = MagicMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock()
    return mock_client


@pytest.fixture
def hoax_hits():
    """Search hits for a debunked claim, one of them from an official domain."""
    return [
        SearchHit(
            title="[HOAKS] Vaksin X Menyebabkan Tubuh Jadi Magnet",
            snippet="Beredar di TikTok klaim vaksin menyebabkan tubuh menjadi magnet. Faktanya klaim tersebut tidak benar.",
            link="https://www.kemkes.go.id/article/hoaks-vaksin-magnet",
            display_domain="kemkes.go.id",
        ),
        SearchHit(
            title="Cek Fakta: Vaksin Tidak Menyebabkan Magnet",
            snippet="Video viral di Facebook menyebut vaksin menyebabkan magnet pada lengan.",
            link="https://cekfakta.example.com/vaksin-magnet",
            display_domain="cekfakta.example.com",
        ),
        SearchHit(
            title="Resep masakan hari ini",
            snippet="Tidak ada kaitannya dengan klaim apa pun.",
            link="https://resep.example.com/masakan",
            display_domain="resep.example.com",
        ),
    ]


@pytest.fixture
def sample_article():
    return ScrapedArticle(
        url="https://www.kemkes.go.id/article/hoaks-vaksin-magnet",
        title="Hoaks Vaksin Magnet",
        content="Kementerian Kesehatan menegaskan bahwa vaksin tidak mengandung logam yang dapat menarik magnet.",
        published_date="2021-06-01",
        author="Biro Komunikasi",
        word_count=14,
    )


@pytest.fixture
def sample_gemini_response():
    """Sample Gemini generateContent response."""
    return {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {
                            "text": '```json\n{"verdict": "Terbantah", "confidence": "Tinggi", '
                                    '"explanation": "Klaim tidak didukung bukti.", '
                                    '"analysis": "Beberapa sumber resmi membantah.", '
                                    '"sources_used": ["kemkes.go.id"]}\n```'
                        }
                    ]
                }
            }
        ]
    }


@pytest.fixture
def sample_article_html():
    """Article page with metadata, boilerplate and noise around the body."""
    return """
    <html>
      <head>
        <title>Fallback Title</title>
        <meta property="og:title" content="Vaksin Tidak Membuat Tubuh Jadi Magnet">
        <meta property="article:published_time" content="2021-06-01T08:00:00+07:00">
        <meta name="author" content="Tim Cek Fakta">
        <script>var tracking = "this paragraph-length script text must never be extracted at all";</script>
      </head>
      <body>
        <nav><p>Menu</p></nav>
        <article>
          <h1>Judul Artikel</h1>
          <p>Kementerian Kesehatan memastikan bahwa vaksin tidak mengandung bahan logam apa pun. Baca juga: Vaksin Aman</p>
          <p>Pendek.</p>
          <p>Para ahli menjelaskan bahwa dosis vaksin terlalu kecil untuk menimbulkan efek magnetis pada tubuh manusia.</p>
        </article>
      </body>
    </html>
    """
