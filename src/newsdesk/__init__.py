"""Public package exports for the magazine content pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover
    from .articles import Article, ArticleRepository, sort_articles
    from .config import SiteConfig, load_config
    from .facets import Facet, count_categories, count_tags, filter_by_category, filter_by_tags
    from .file_parser import FrontMatter, parse_article_file, parse_front_matter
    from .manifest import load_manifest, sanitize_filename
    from .reader import ArticleReader
    from .search import SearchResult, search_articles
    from .site_client import SiteClient
    from .views import build_article_view, build_home_view, build_list_view
    from .warm_cache import WarmCache

_EXPORTS = {
    "Article": "articles",
    "ArticleRepository": "articles",
    "sort_articles": "articles",
    "SiteConfig": "config",
    "load_config": "config",
    "Facet": "facets",
    "count_categories": "facets",
    "count_tags": "facets",
    "filter_by_category": "facets",
    "filter_by_tags": "facets",
    "FrontMatter": "file_parser",
    "parse_article_file": "file_parser",
    "parse_front_matter": "file_parser",
    "load_manifest": "manifest",
    "sanitize_filename": "manifest",
    "ArticleReader": "reader",
    "SearchResult": "search",
    "search_articles": "search",
    "SiteClient": "site_client",
    "build_article_view": "views",
    "build_home_view": "views",
    "build_list_view": "views",
    "WarmCache": "warm_cache",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> Any:  # pragma: no cover - thin import wrapper
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(name)
    from importlib import import_module

    module = import_module(f".{module_name}", __name__)
    return getattr(module, name)


def __dir__() -> list[str]:  # pragma: no cover - module metadata
    return sorted(__all__ + sorted(set(_EXPORTS.values())))
