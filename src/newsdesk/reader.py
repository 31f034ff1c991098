"""Single-article page loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .articles import Article, ArticleRepository, build_article
from .errors import NewsdeskError
from .manifest import sanitize_filename
from .views import ArticleView, build_article_view
from .warm_cache import WarmCache

logger = logging.getLogger(__name__)

INVALID_MESSAGE = "Missing or invalid article parameter."
UNAVAILABLE_MESSAGE = "Could not load this article."


@dataclass(slots=True)
class ArticlePage:
    status: str
    view: Optional[ArticleView] = None
    message: str = ""
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.status == "ok"


class ArticleReader:
    """Opens articles for the single-article page, preferring the warm cache."""

    def __init__(self, repository: ArticleRepository, cache: WarmCache | None = None) -> None:
        self.repository = repository
        self.cache = cache if cache is not None else WarmCache(repository)

    def _from_cache(self, file: str) -> Article | None:
        text = self.cache.read(file)
        if not text:
            return None
        try:
            return build_article(file, text)
        except Exception as exc:
            logger.debug("Discarding cached copy of %s: %s", file, exc)
            return None

    def open(self, param: str | None) -> ArticlePage:
        """Load the article named by the page's ``article`` parameter."""

        file = sanitize_filename(param)
        if not file:
            return ArticlePage(status="invalid", message=INVALID_MESSAGE)

        config = self.repository.config
        article = self._from_cache(file)
        if article is not None:
            return ArticlePage(status="ok", view=build_article_view(article, config), from_cache=True)

        try:
            article = self.repository.load_article(file)
        except NewsdeskError as exc:
            logger.error("Could not load article %s: %s", file, exc)
            return ArticlePage(status="unavailable", message=UNAVAILABLE_MESSAGE)
        return ArticlePage(status="ok", view=build_article_view(article, config))
