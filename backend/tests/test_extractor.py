import asyncio
import pytest
import httpx
from unittest.mock import MagicMock

from config.constants import SCRAPER_CONFIG, ScraperConfig
from services.scraper import (
    ContentExtractor,
    FetchError,
    parse_article,
    extract_main_content,
    first_match,
    TITLE_RULES,
)
from bs4 import BeautifulSoup


def _client_returning(response_factory):
    return httpx.AsyncClient(transport=httpx.MockTransport(response_factory))


class TestParseArticle:
    """Tests for turning raw markup into a ScrapedArticle."""

    def test_extracts_metadata_and_body(self, sample_article_html):
        """Test og:title, published time and author meta win over page text."""
        article = parse_article(sample_article_html, "https://cekfakta.example.com/a")

        assert article is not None
        assert article.url == "https://cekfakta.example.com/a"
        assert article.title == "Vaksin Tidak Membuat Tubuh Jadi Magnet"
        assert article.published_date == "2021-06-01T08:00:00+07:00"
        assert article.author == "Tim Cek Fakta"

    def test_drops_short_paragraphs_scripts_and_boilerplate(self, sample_article_html):
        """Test only substantial paragraphs survive, without boilerplate phrases."""
        article = parse_article(sample_article_html, "https://cekfakta.example.com/a")

        assert "Kementerian Kesehatan" in article.content
        assert "Para ahli menjelaskan" in article.content
        assert "Pendek." not in article.content
        assert "tracking" not in article.content
        assert "Baca juga:" not in article.content
        assert "  " not in article.content
        assert article.word_count == len(article.content.split())

    def test_title_falls_back_to_heading(self):
        """Test h1 is used when no og:title is present."""
        html = "<html><body><h1>Judul Utama</h1><p>" + "isi artikel yang cukup panjang " * 3 + "</p></body></html>"
        article = parse_article(html, "https://example.com/x")

        assert article.title == "Judul Utama"
        assert article.published_date == ""
        assert article.author == ""

    def test_long_content_is_truncated(self):
        """Test content never exceeds the cap and ends with the marker."""
        paragraph = "<p>" + "Informasi penting mengenai klaim yang beredar. " * 10 + "</p>"
        html = "<html><body><article>" + paragraph * 20 + "</article></body></html>"
        article = parse_article(html, "https://example.com/long")

        assert len(article.content) <= SCRAPER_CONFIG.MAX_CONTENT_LENGTH
        assert article.content.endswith("...")

    def test_no_substantial_paragraph_returns_none(self):
        """Test a page without any paragraph over the minimum length yields nothing."""
        html = "<html><body><p>Halo.</p><p>Menu</p></body></html>"

        assert parse_article(html, "https://example.com/empty") is None

    def test_specific_selector_wins_over_generic(self):
        """Test the cascade stops at the first selector that yields paragraphs."""
        body = "Paragraf isi utama artikel yang panjangnya lebih dari lima puluh karakter."
        sidebar = "Paragraf sidebar yang juga panjangnya lebih dari lima puluh karakter."
        html = (
            f'<html><body><div class="entry-content"><p>{body}</p></div>'
            f'<aside><p>{sidebar}</p></aside></body></html>'
        )
        soup = BeautifulSoup(html, "html.parser")

        assert extract_main_content(soup) == body

    def test_first_match_skips_empty_nodes(self):
        """Test empty matches fall through to the next rule."""
        soup = BeautifulSoup('<meta property="og:title" content=""><h1>  </h1><title>Judul</title>', "html.parser")

        assert first_match(soup, TITLE_RULES) == "Judul"


@pytest.mark.asyncio
class TestContentExtractorFetch:
    """Tests for ContentExtractor.fetch error reporting."""

    async def test_successful_fetch(self, sample_article_html):
        """Test a 200 page comes back as an article."""
        client = _client_returning(lambda request: httpx.Response(200, text=sample_article_html))
        extractor = ContentExtractor(client=client)

        result = await extractor.fetch("https://cekfakta.example.com/a")

        assert result.ok
        assert result.error is None
        assert result.status_code == 200
        assert result.article.title == "Vaksin Tidak Membuat Tubuh Jadi Magnet"

    async def test_sends_browser_headers(self, sample_article_html):
        """Test the scraper identifies with the configured browser headers."""
        seen = {}

        def handler(request):
            seen["headers"] = request.headers
            return httpx.Response(200, text=sample_article_html)

        extractor = ContentExtractor(client=_client_returning(handler))
        await extractor.fetch("https://cekfakta.example.com/a")

        assert seen["headers"]["User-Agent"] == SCRAPER_CONFIG.USER_AGENT
        assert seen["headers"]["Accept-Language"] == SCRAPER_CONFIG.ACCEPT_LANGUAGE

    async def test_http_status_error(self):
        """Test non-2xx responses are reported, not raised."""
        extractor = ContentExtractor(client=_client_returning(lambda request: httpx.Response(404)))

        result = await extractor.fetch("https://example.com/missing")

        assert not result.ok
        assert result.error == FetchError.HTTP_STATUS
        assert result.status_code == 404

    async def test_network_error(self):
        """Test connection failures map to NETWORK."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        extractor = ContentExtractor(client=_client_returning(handler))
        result = await extractor.fetch("https://example.com/down")

        assert result.error == FetchError.NETWORK
        assert result.article is None

    async def test_transport_timeout(self):
        """Test httpx timeouts map to TIMEOUT."""
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        extractor = ContentExtractor(client=_client_returning(handler))
        result = await extractor.fetch("https://example.com/slow")

        assert result.error == FetchError.TIMEOUT

    async def test_overall_timeout(self):
        """Test a request that never finishes is cut off by the extractor timeout."""
        async def never_finishes(*args, **kwargs):
            await asyncio.sleep(10)

        client = MagicMock()
        client.get = never_finishes
        extractor = ContentExtractor(client=client, timeout=0.01)

        result = await extractor.fetch("https://example.com/hang")

        assert result.error == FetchError.TIMEOUT

    async def test_no_content(self):
        """Test a page without an article body maps to NO_CONTENT."""
        client = _client_returning(lambda request: httpx.Response(200, text="<html><body><p>Hi</p></body></html>"))
        extractor = ContentExtractor(client=client)

        result = await extractor.fetch("https://example.com/thin")

        assert result.error == FetchError.NO_CONTENT
        assert await extractor.extract("https://example.com/thin") is None

    async def test_oversized_body_is_capped_before_parsing(self):
        """Test markup past the HTML cap never reaches the parser."""
        head = "<html><body><p>" + "Kementerian Kesehatan membantah klaim vaksin magnet. " * 3 + "</p>"
        tail = "<p>" + "Paragraf tambahan yang berada jauh di akhir halaman. " * 3 + "</p>" * 2000
        config = ScraperConfig(MAX_HTML_LENGTH=len(head) + 10)
        client = _client_returning(lambda request: httpx.Response(200, text=head + tail))
        extractor = ContentExtractor(client=client, config=config)

        result = await extractor.fetch("https://example.com/huge")

        assert result.ok
        assert "Kementerian Kesehatan" in result.article.content
        assert "Paragraf tambahan" not in result.article.content
