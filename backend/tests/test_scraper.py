import asyncio
import pytest

from models.sources import ScrapedArticle
from services.scraper import SourceScraper, FetchResult, FetchError


class FakeExtractor:
    """Extractor double: URLs in `failing` fail, `delays` reorders completion."""

    def __init__(self, failing=(), delays=None, raising=()):
        self.failing = set(failing)
        self.raising = set(raising)
        self.delays = delays or {}
        self.fetched = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url):
        self.fetched.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, 0))
            if url in self.raising:
                raise RuntimeError("extractor crashed")
            if url in self.failing:
                return FetchResult(url, error=FetchError.HTTP_STATUS, status_code=500)
            return FetchResult(url, article=ScrapedArticle(url=url, title=url, content=f"isi dari {url}"))
        finally:
            self.in_flight -= 1


def _urls(count):
    return [f"https://news{i}.example.com/artikel" for i in range(count)]


@pytest.mark.asyncio
class TestScrapeMultiple:
    """Tests for SourceScraper.scrape_multiple."""

    async def test_returns_articles_in_url_order(self):
        """Test completion order does not change the output order."""
        urls = _urls(3)
        extractor = FakeExtractor(delays={urls[0]: 0.05, urls[1]: 0.01})
        scraper = SourceScraper(extractor)

        articles = await scraper.scrape_multiple(urls, limit=3)

        assert [a.url for a in articles] == urls

    async def test_respects_limit(self):
        """Test no more than `limit` articles come back."""
        scraper = SourceScraper(FakeExtractor())

        articles = await scraper.scrape_multiple(_urls(5), limit=2)

        assert len(articles) == 2
        assert [a.url for a in articles] == _urls(5)[:2]

    async def test_failures_are_skipped_and_later_urls_fill_in(self):
        """Test a failed URL is replaced by the next candidate."""
        urls = _urls(5)
        extractor = FakeExtractor(failing={urls[1]}, raising={urls[2]})
        scraper = SourceScraper(extractor)

        articles = await scraper.scrape_multiple(urls, limit=3)

        assert [a.url for a in articles] == [urls[0], urls[3], urls[4]]

    async def test_blocked_domains_are_never_fetched(self):
        """Test social platforms and their subdomains are filtered out."""
        extractor = FakeExtractor()
        scraper = SourceScraper(extractor)
        urls = [
            "https://www.facebook.com/post/1",
            "https://m.youtube.com/watch?v=abc",
            "https://x.com/someone/status/1",
            "https://news.example.com/berita",
        ]

        articles = await scraper.scrape_multiple(urls, limit=3)

        assert extractor.fetched == ["https://news.example.com/berita"]
        assert [a.url for a in articles] == ["https://news.example.com/berita"]

    async def test_similar_host_is_not_blocked(self):
        """Test blocking matches hosts, not substrings."""
        scraper = SourceScraper(FakeExtractor())

        assert not scraper.should_skip("https://notfacebook.com.example.org/a")
        assert scraper.should_skip("https://web.facebook.com/a")
        assert scraper.should_skip("not a url")

    async def test_all_failures_yield_empty_list(self):
        """Test total failure is an empty list, not an error."""
        urls = _urls(3)
        scraper = SourceScraper(FakeExtractor(failing=urls))

        assert await scraper.scrape_multiple(urls) == []

    async def test_concurrency_is_bounded(self):
        """Test at most max_concurrency fetches run at once."""
        urls = _urls(6)
        extractor = FakeExtractor(failing=urls, delays={u: 0.01 for u in urls})
        scraper = SourceScraper(extractor, max_concurrency=2)

        await scraper.scrape_multiple(urls, limit=3)

        assert extractor.max_in_flight <= 2
        assert extractor.fetched == urls

    async def test_zero_limit_and_empty_input(self):
        """Test degenerate inputs return immediately."""
        extractor = FakeExtractor()
        scraper = SourceScraper(extractor)

        assert await scraper.scrape_multiple(_urls(2), limit=0) == []
        assert await scraper.scrape_multiple([], limit=3) == []
        assert extractor.fetched == []
