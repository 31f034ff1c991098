"""Manifest loading and article filename sanitation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List

import requests

if TYPE_CHECKING:  # pragma: no cover
    from .config import SiteConfig
    from .site_client import SiteClient

logger = logging.getLogger(__name__)


def sanitize_filename(filename: Any) -> str:
    """Return a safe site-relative article path, or ``""`` if it is rejected.

    Backslashes become forward slashes and one leading ``/`` is dropped.
    Traversal (``..``), absolute URLs and paths that remain absolute after
    that (``//host/file``) are rejected.
    """

    if not filename or not isinstance(filename, str):
        return ""
    value = filename.replace("\\", "/").strip()
    if value.startswith("/"):
        value = value[1:]
    if ".." in value or value.startswith("/"):
        return ""
    if value.lower().startswith(("http:", "https:")):
        return ""
    return value


def article_path(file: str, config: "SiteConfig") -> str:
    """Return the site path of ``file``, namespacing it under ``news_dir``."""

    news_dir = config.news_dir.strip("/") + "/"
    if file.startswith(news_dir):
        return file
    return f"{news_dir}{file}"


def load_manifest(client: "SiteClient", config: "SiteConfig") -> List[str]:
    """Fetch the manifest and return its sanitized article filenames.

    Never raises: an unreachable, malformed or non-list manifest is logged and
    treated as empty so the pages still render.
    """

    try:
        data = client.fetch_json(config.manifest_path)
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Could not load manifest %s: %s", config.manifest_path, exc)
        return []

    if not isinstance(data, list):
        logger.warning(
            "Manifest %s is not a JSON array (got %s)",
            config.manifest_path,
            type(data).__name__,
        )
        return []

    files: List[str] = []
    for entry in data:
        file = sanitize_filename(entry)
        if file:
            files.append(file)
        else:
            logger.debug("Dropping manifest entry %r", entry)
    logger.info("Manifest lists %d article(s)", len(files))
    return files
