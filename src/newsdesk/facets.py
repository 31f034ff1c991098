"""Category and tag facets and the filters built on them."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .articles import Article


@dataclass(frozen=True, slots=True)
class Facet:
    value: str
    count: int


def _ranked(counter: "Counter[str]", limit: int | None) -> List[Facet]:
    # Counter keeps first-seen order and sorted() is stable, so ties stay in
    # insertion order.
    ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return [Facet(value, count) for value, count in ranked]


def count_categories(articles: Iterable[Article], *, limit: int | None = None) -> List[Facet]:
    counter: "Counter[str]" = Counter()
    for article in articles:
        if article.category:
            counter[article.category] += 1
    return _ranked(counter, limit)


def count_tags(articles: Iterable[Article], *, limit: int | None = None) -> List[Facet]:
    counter: "Counter[str]" = Counter()
    for article in articles:
        for tag in article.derived_tags:
            key = tag.strip()
            if key:
                counter[key] += 1
    return _ranked(counter, limit)


def filter_by_category(articles: Sequence[Article], category: str | None) -> Sequence[Article]:
    wanted = (category or "").strip().lower()
    if not wanted:
        return articles
    return [article for article in articles if article.category.lower() == wanted]


def filter_by_tags(articles: Sequence[Article], tags: str | Iterable[str] | None) -> Sequence[Article]:
    """Keep articles carrying at least one of ``tags`` (case-insensitive).

    A string is read as the comma separated ``tag`` query parameter.
    """

    if isinstance(tags, str):
        tags = parse_tags_param(tags)
    wanted = {tag.strip().lower() for tag in tags or () if tag and tag.strip()}
    if not wanted:
        return articles
    return [
        article
        for article in articles
        if any(tag.lower() in wanted for tag in article.derived_tags)
    ]


def parse_tags_param(value: str | None) -> List[str]:
    """Split a ``tag=a,b`` query parameter into lowercased tags."""

    if not value:
        return []
    return [part.strip().lower() for part in value.split(",") if part.strip()]


def toggle_tag(active: Sequence[str], tag: str) -> List[str]:
    """Return the tag selection after clicking ``tag`` in the tag cloud."""

    key = tag.strip().lower()
    current = [item.lower() for item in active]
    if key in current:
        return [item for item in current if item != key]
    return list(dict.fromkeys([*current, key]))
