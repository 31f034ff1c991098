"""Free-text search with weighted field matching."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import List, Sequence

from .articles import Article, compare_articles

TITLE_WEIGHT = 8
SUBTITLE_WEIGHT = 5
AUTHOR_WEIGHT = 4
CATEGORY_WEIGHT = 4
TAG_WEIGHT = 3
BODY_WEIGHT = 1
BODY_PREFIX_LENGTH = 800


@dataclass(frozen=True, slots=True)
class SearchResult:
    article: Article
    score: int


def _normalize(value: str | None) -> str:
    return (value or "").lower()


def score_article(article: Article, query: str) -> int:
    """Return the relevance of ``article`` for ``query``.

    Each field that contains the query (case-insensitively) adds its weight
    once; a score of ``0`` means no match.
    """

    needle = _normalize(query.strip())
    if not needle:
        return 0
    meta = article.meta
    score = 0
    if needle in _normalize(meta.title):
        score += TITLE_WEIGHT
    if needle in _normalize(meta.subtitle):
        score += SUBTITLE_WEIGHT
    if needle in _normalize(meta.author):
        score += AUTHOR_WEIGHT
    if needle in _normalize(meta.category):
        score += CATEGORY_WEIGHT
    if any(needle in _normalize(tag) for tag in article.derived_tags):
        score += TAG_WEIGHT
    if needle in _normalize(article.body[:BODY_PREFIX_LENGTH]):
        score += BODY_WEIGHT
    return score


def _compare_results(a: SearchResult, b: SearchResult) -> int:
    if a.score != b.score:
        return -1 if a.score > b.score else 1
    return compare_articles(a.article, b.article)


def rank_articles(articles: Sequence[Article], query: str) -> List[SearchResult]:
    """Score ``articles`` and return the matches, best first.

    Equal scores fall back to the canonical article order (newest first,
    undated last, filename descending).
    """

    results = [SearchResult(article, score_article(article, query)) for article in articles]
    matches = [result for result in results if result.score > 0]
    return sorted(matches, key=cmp_to_key(_compare_results))


def search_articles(articles: Sequence[Article], query: str | None) -> Sequence[Article]:
    """Return the articles matching ``query``; a blank query returns ``articles``."""

    if query is None or not query.strip():
        return articles
    return [result.article for result in rank_articles(articles, query)]
