"""Page view-models projected from the canonical article collection.

Everything here is pure: functions take already-loaded articles and a
:class:`~newsdesk.config.SiteConfig` and return dataclasses that a
presentation adapter (HTML templates, the JSON preview CLI, ...) renders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence
from urllib.parse import quote, urlencode
import math

from .articles import Article
from .config import SiteConfig
from .facets import (
    count_categories,
    count_tags,
    filter_by_category,
    filter_by_tags,
    parse_tags_param,
    toggle_tag,
)
from .file_parser import parse_date
from .search import search_articles

ARTICLE_PAGE = "article.html"
LIST_PAGE = "newsletters.html"
DEFAULT_AUTHOR = "Staff"
UNTITLED = "Untitled"
CARD_TAG_LIMIT = 2


@dataclass(frozen=True, slots=True)
class TagLink:
    label: str
    url: str
    count: int = 0
    active: bool = False


@dataclass(frozen=True, slots=True)
class ArticleCard:
    file: str
    url: str
    title: str
    subtitle: str
    category: str
    author: str
    date_text: str
    byline: str
    thumbnail: str
    chips: List[str] = field(default_factory=list)


@dataclass(slots=True)
class HomeView:
    lead: Optional[ArticleCard]
    top_stories: List[ArticleCard]
    latest: List[ArticleCard]
    sidebar: List[ArticleCard]
    trending_tags: List[TagLink]

    @property
    def is_empty(self) -> bool:
        return self.lead is None


@dataclass(slots=True)
class ListView:
    query: str
    category: str
    tags: List[str]
    articles: List[ArticleCard]
    category_facets: List[TagLink]
    tag_cloud: List[TagLink]
    summary: str
    empty_message: str

    @property
    def count(self) -> int:
        return len(self.articles)


@dataclass(slots=True)
class ArticleView:
    file: str
    title: str
    subtitle: str
    author: str
    category: str
    date_text: str
    byline: str
    reading_time: str
    thumbnail: str
    tags: List[TagLink]
    body: str
    page_title: str


# ----------------------------------------------------------------------
# Field formatting
# ----------------------------------------------------------------------
def format_date(value: str | None, config: SiteConfig | None = None) -> str:
    """Format a ``Date`` value for display, ``""`` when it cannot be parsed."""

    parsed = parse_date(value)
    if parsed is None:
        return ""
    return parsed.strftime((config or SiteConfig()).date_format)


def count_words(text: str | None) -> int:
    return len((text or "").split())


def reading_time(text: str | None, words_per_minute: int = 200) -> str:
    # Half-up rounding: 300 words at 200 wpm is 2 minutes.
    minutes = max(1, math.floor(count_words(text) / words_per_minute + 0.5))
    return f"{minutes} min read"


def resolve_thumbnail(value: str | None, config: SiteConfig | None = None) -> str:
    """Return the image to show for a ``Thumbnail`` value.

    Absolute URLs, protocol-relative URLs, absolute paths and relative paths
    are all used as written; only a missing value falls back to the default.
    """

    text = (value or "").strip()
    if not text:
        return (config or SiteConfig()).default_thumbnail
    return text


def article_url(file: str) -> str:
    return f"{ARTICLE_PAGE}?article={quote(file, safe='')}"


def list_url(query: str = "", category: str = "", tags: Sequence[str] = ()) -> str:
    params = []
    if query:
        params.append(("q", query))
    if category:
        params.append(("category", category))
    if tags:
        params.append(("tag", ",".join(tags)))
    if not params:
        return LIST_PAGE
    return f"{LIST_PAGE}?{urlencode(params, quote_via=quote)}"


def tag_url(tag: str) -> str:
    return list_url(tags=[tag])


def category_url(category: str) -> str:
    return list_url(category=category)


def _byline(date_text: str, author: str) -> str:
    return f"{date_text} • {author}" if date_text else author


def build_card(article: Article, config: SiteConfig) -> ArticleCard:
    meta = article.meta
    date_text = format_date(meta.date, config)
    author = meta.author or DEFAULT_AUTHOR
    return ArticleCard(
        file=article.file,
        url=article_url(article.file),
        title=article.title,
        subtitle=meta.subtitle or "",
        category=article.category,
        author=author,
        date_text=date_text,
        byline=_byline(date_text, author),
        thumbnail=resolve_thumbnail(meta.thumbnail, config),
        chips=list(article.derived_tags[:CARD_TAG_LIMIT]),
    )


def _cards(articles: Iterable[Article], config: SiteConfig) -> List[ArticleCard]:
    return [build_card(article, config) for article in articles]


# ----------------------------------------------------------------------
# Page projections
# ----------------------------------------------------------------------
def build_home_view(articles: Sequence[Article], config: SiteConfig | None = None) -> HomeView:
    """Project the home page.

    The grid and the sidebar both start right after the top stories and are
    independent windows over the same range.
    """

    config = config or SiteConfig()
    if not articles:
        return HomeView(lead=None, top_stories=[], latest=[], sidebar=[], trending_tags=[])

    rest = 1 + config.top_stories_limit
    trending = count_tags(articles, limit=config.trending_tags_limit)
    return HomeView(
        lead=build_card(articles[0], config),
        top_stories=_cards(articles[1:rest], config),
        latest=_cards(articles[rest:rest + config.home_latest_limit], config),
        sidebar=_cards(articles[rest:rest + config.sidebar_latest_limit], config),
        trending_tags=[TagLink(f.value, tag_url(f.value), f.count) for f in trending],
    )


def _summary(count: int, query: str, category: str, tags: Sequence[str]) -> str:
    parts = []
    if query:
        parts.append(f"“{query}”")
    if category:
        parts.append(f"Category: {category}")
    if tags:
        parts.append(f"Tags: {', '.join(tags)}")
    if not parts:
        return ""
    return f"{count} result(s) — {' • '.join(parts)}"


def _empty_message(query: str, category: str, tags: Sequence[str]) -> str:
    message = "No items found"
    if query:
        message += f" for “{query}”"
    if category:
        message += f" in {category}"
    if tags:
        message += f" with tags: {', '.join(tags)}"
    return message + "."


def build_list_view(
    articles: Sequence[Article],
    config: SiteConfig | None = None,
    *,
    query: str | None = None,
    category: str | None = None,
    tags: str | Sequence[str] | None = None,
) -> ListView:
    """Project the list page for the given filters.

    Filters apply in order category, tags, search, to the full visible
    collection; every remaining article is listed. ``tags`` accepts the raw
    comma separated query parameter or a sequence of tags.
    """

    config = config or SiteConfig()
    query = (query or "").strip()
    category = (category or "").strip()
    if isinstance(tags, str) or tags is None:
        active_tags = parse_tags_param(tags)
    else:
        active_tags = parse_tags_param(",".join(tags))

    filtered = filter_by_category(articles, category)
    filtered = filter_by_tags(filtered, active_tags)
    filtered = search_articles(filtered, query)

    category_facets = [
        TagLink(f.value, category_url(f.value), f.count, f.value.lower() == category.lower())
        for f in count_categories(articles)
    ]
    tag_cloud = []
    for facet in count_tags(articles, limit=config.tag_cloud_limit):
        next_tags = toggle_tag(active_tags, facet.value)
        tag_cloud.append(
            TagLink(
                facet.value,
                list_url(query, category, next_tags),
                facet.count,
                facet.value.lower() in active_tags,
            )
        )

    return ListView(
        query=query,
        category=category,
        tags=active_tags,
        articles=_cards(filtered, config),
        category_facets=category_facets,
        tag_cloud=tag_cloud,
        summary=_summary(len(filtered), query, category, active_tags),
        empty_message="" if filtered else _empty_message(query, category, active_tags),
    )


def build_article_view(article: Article, config: SiteConfig | None = None) -> ArticleView:
    config = config or SiteConfig()
    meta = article.meta
    date_text = format_date(meta.date, config)
    author = meta.author or DEFAULT_AUTHOR
    return ArticleView(
        file=article.file,
        title=meta.title or UNTITLED,
        subtitle=meta.subtitle or "",
        author=author,
        category=article.category,
        date_text=date_text,
        byline=_byline(date_text, author),
        reading_time=reading_time(article.body, config.words_per_minute),
        thumbnail=resolve_thumbnail(meta.thumbnail, config),
        tags=[TagLink(tag, tag_url(tag)) for tag in article.derived_tags],
        body=article.body,
        page_title=f"{meta.title or article.file} - {config.site_name}",
    )
