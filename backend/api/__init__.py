from .search import GoogleSearchClient, to_search_hit, resolve_thumbnail

__all__ = [
    "GoogleSearchClient",
    "to_search_hit",
    "resolve_thumbnail",
]
