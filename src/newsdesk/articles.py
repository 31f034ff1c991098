"""Loading, deriving and ordering the magazine's articles."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key
from typing import TYPE_CHECKING, Iterable, List, Tuple
import logging

import requests

from .errors import ArticleUnavailableError, InvalidArticleError
from .file_parser import FrontMatter, is_truthy, parse_date, parse_front_matter, split_tags
from .manifest import article_path, load_manifest, sanitize_filename

if TYPE_CHECKING:  # pragma: no cover
    from .config import SiteConfig
    from .site_client import SiteClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Article:
    """One parsed article plus the fields derived from its front matter."""

    file: str
    meta: FrontMatter
    body: str
    derived_date: datetime | None = None
    derived_tags: Tuple[str, ...] = ()

    @property
    def title(self) -> str:
        return self.meta.title or self.file

    @property
    def category(self) -> str:
        return (self.meta.category or "").strip()

    @property
    def is_hidden(self) -> bool:
        return is_truthy(self.meta.hidden)

    @property
    def is_draft(self) -> bool:
        return is_truthy(self.meta.draft)


def build_article(file: str, text: str) -> Article:
    """Parse ``text`` and attach the derived date and tags."""

    parsed = parse_front_matter(text)
    return Article(
        file=file,
        meta=parsed.meta,
        body=parsed.body,
        derived_date=parse_date(parsed.meta.date),
        derived_tags=tuple(split_tags(parsed.meta.tags)),
    )


def compare_articles(a: Article, b: Article) -> int:
    """Canonical ordering: newest first, undated last, then filename descending."""

    ad, bd = a.derived_date, b.derived_date
    if ad is not None and bd is not None and ad != bd:
        return -1 if ad > bd else 1
    if ad is not None and bd is None:
        return -1
    if ad is None and bd is not None:
        return 1
    if a.file == b.file:
        return 0
    return -1 if a.file > b.file else 1


def sort_articles(articles: Iterable[Article]) -> List[Article]:
    return sorted(articles, key=cmp_to_key(compare_articles))


def visible_articles(articles: Iterable[Article]) -> List[Article]:
    return [article for article in articles if not article.is_hidden]


class ArticleRepository:
    """Reads the manifest and the articles it lists through a :class:`SiteClient`."""

    def __init__(self, client: "SiteClient", config: "SiteConfig") -> None:
        self.client = client
        self.config = config

    def fetch_raw(self, file: str) -> str:
        """Return the raw text of a sanitized article ``file``."""

        try:
            return self.client.fetch_text(article_path(file, self.config))
        except requests.RequestException as exc:
            raise ArticleUnavailableError(file, exc) from exc

    def load_article(self, file: str) -> Article:
        """Fetch and parse one article.

        Raises
        ------
        InvalidArticleError
            If ``file`` is rejected by filename sanitation. Nothing is fetched.
        ArticleUnavailableError
            If the article text cannot be fetched.
        """

        safe = sanitize_filename(file)
        if not safe:
            raise InvalidArticleError(file)
        return build_article(safe, self.fetch_raw(safe))

    def load_all(self, files: Iterable[str]) -> List[Article]:
        """Load ``files`` concurrently, dropping the ones that fail.

        Results keep the order of ``files``; failures are logged individually
        and never abort the batch.
        """

        files = list(files)
        if not files:
            return []

        articles: List[Article] = []
        workers = max(1, min(self.config.max_workers, len(files)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [(file, executor.submit(self.load_article, file)) for file in files]
            for file, future in futures:
                try:
                    articles.append(future.result())
                except Exception as exc:
                    logger.warning("Skipping article %s: %s", file, exc)

        logger.info("Loaded %d of %d article(s)", len(articles), len(files))
        return articles

    def load_visible_sorted(self) -> List[Article]:
        """Return every visible article in canonical order."""

        files = load_manifest(self.client, self.config)
        if not files:
            return []
        return sort_articles(visible_articles(self.load_all(files)))
