from typing import Sequence

from config.constants import PROMPT_CONFIG, LLM_CONFIG, PromptConfig
from models.sources import SearchHit, ScrapedArticle
from models.verdicts import Verdict, Confidence
import prompts


def _quoted_choices(values) -> str:
    return " | ".join(f'"{v.value}"' for v in values)


class PromptComposer:
    """
    Builds the Gemini request text from a claim, its search hits and scraped articles.
    The output is a pure function of the inputs: no timestamps, no reordering.
    """

    def __init__(self, config: PromptConfig = PROMPT_CONFIG):
        self.config = config

    def compose(
        self,
        claim: str,
        search_hits: Sequence[SearchHit],
        scraped_articles: Sequence[ScrapedArticle],
    ) -> str:
        return prompts.VERIFICATION_PROMPT.format(
            claim=claim,
            search_data=self.build_snippet_section(search_hits),
            full_content=self.build_full_content_section(scraped_articles),
            verdicts=_quoted_choices(Verdict),
            confidences=_quoted_choices(Confidence),
            max_sources=LLM_CONFIG.MAX_SOURCES_USED,
        )

    def build_snippet_section(self, search_hits: Sequence[SearchHit]) -> str:
        if not search_hits:
            return ""
        items = []
        for index, hit in enumerate(search_hits, start=1):
            snippet = (hit.snippet or prompts.NO_SNIPPET)[:self.config.MAX_SNIPPET_LENGTH]
            items.append(prompts.SNIPPET_ITEM.format(
                index=index,
                domain=hit.display_domain or prompts.NO_DOMAIN,
                title=hit.title or prompts.NO_TITLE,
                snippet=snippet,
            ))
        return prompts.SNIPPET_SECTION_HEADER + "\n\n".join(items)

    def build_full_content_section(self, scraped_articles: Sequence[ScrapedArticle]) -> str:
        articles = list(scraped_articles)[:self.config.MAX_FULL_ARTICLES]
        if not articles:
            return ""
        items = []
        for index, article in enumerate(articles, start=1):
            items.append(prompts.FULL_CONTENT_ITEM.format(
                index=index,
                url=article.url,
                title=article.title,
                date=article.published_date or prompts.UNKNOWN,
                author=article.author or prompts.UNKNOWN,
                content=article.content[:self.config.MAX_ARTICLE_LENGTH],
            ))
        return prompts.FULL_CONTENT_SECTION_HEADER + "\n\n".join(items)
