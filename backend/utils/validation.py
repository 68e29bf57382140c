import re

from config.constants import SEARCH_CONFIG
from exceptions import ValidationException


class InputValidator:

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

    @staticmethod
    def sanitize_query(query: str) -> str:
        if not query or not query.strip():
            raise ValidationException("query", "Query cannot be empty")

        query = InputValidator.CONTROL_CHARS_PATTERN.sub('', query)

        query = re.sub(r'\s+', ' ', query).strip()

        if len(query) < SEARCH_CONFIG.MIN_QUERY_LENGTH:
            raise ValidationException("query", f"Query must be at least {SEARCH_CONFIG.MIN_QUERY_LENGTH} characters long")

        if len(query) > SEARCH_CONFIG.MAX_QUERY_LENGTH:
            raise ValidationException("query", f"Query cannot exceed {SEARCH_CONFIG.MAX_QUERY_LENGTH} characters")

        return query
