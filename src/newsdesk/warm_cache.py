"""Session-scoped cache of raw article text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, MutableMapping, Optional

from .manifest import sanitize_filename

if TYPE_CHECKING:  # pragma: no cover
    from .articles import ArticleRepository

logger = logging.getLogger(__name__)

KEY_PREFIX = "pre:"


def cache_key(file: str) -> str:
    return KEY_PREFIX + file


class WarmCache:
    """Best-effort store of article text primed before a reader opens it.

    ``storage`` is any mutable mapping that lives as long as the browsing
    session. Storage and fetch failures are logged at debug level and never
    reach the caller.
    """

    def __init__(
        self,
        repository: "ArticleRepository",
        storage: Optional[MutableMapping[str, str]] = None,
    ) -> None:
        self.repository = repository
        self.storage: MutableMapping[str, str] = {} if storage is None else storage

    def read(self, file: str) -> str | None:
        safe = sanitize_filename(file)
        if not safe:
            return None
        try:
            return self.storage.get(cache_key(safe))
        except Exception as exc:
            logger.debug("Warm cache read failed for %s: %s", safe, exc)
            return None

    def prime(self, file: str) -> None:
        """Fetch and store ``file`` unless it is already cached."""

        safe = sanitize_filename(file)
        if not safe:
            return
        key = cache_key(safe)
        try:
            if self.storage.get(key):
                return
            text = self.repository.fetch_raw(safe)
            self.storage[key] = text
        except Exception as exc:
            logger.debug("Could not prime %s: %s", safe, exc)
