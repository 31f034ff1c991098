from __future__ import annotations

import json
import threading
from typing import Any, Dict, Optional, Union
from urllib.parse import urlsplit

import pytest
import requests

from newsdesk.articles import ArticleRepository
from newsdesk.config import SiteConfig
from newsdesk.site_client import SiteClient

BASE_URL = "https://magazine.example.com"

Served = Union[str, bytes, int, Exception]


def make_response(url: str, *, body: bytes = b"", status_code: int = 200) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response._content = body
    response.encoding = "utf-8"
    return response


class FakeSession:
    """Serves site files from a dict of path -> content and records requests.

    A value that is an ``int`` is returned as an empty response with that
    status code; an exception instance is raised instead of responding.
    """

    def __init__(self, files: Optional[Dict[str, Served]] = None) -> None:
        self.files: Dict[str, Served] = dict(files or {})
        self.calls: list[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> requests.Response:
        path = urlsplit(url).path.lstrip("/")
        with self._lock:
            self.calls.append(
                {"method": method, "url": url, "path": path, "headers": headers or {}, "timeout": timeout}
            )
        served = self.files.get(path)
        if served is None:
            return make_response(url, status_code=404)
        if isinstance(served, Exception):
            raise served
        if isinstance(served, int):
            return make_response(url, status_code=served)
        body = served if isinstance(served, bytes) else served.encode("utf-8")
        return make_response(url, body=body)

    def paths(self) -> list[str]:
        return [call["path"] for call in self.calls]


def article_text(
    title: str | None = None,
    *,
    date: str | None = None,
    body: str = "Body text.",
    **fields: str,
) -> str:
    lines = ["---"]
    if title is not None:
        lines.append(f"Title: {title}")
    if date is not None:
        lines.append(f"Date: {date}")
    for key, value in fields.items():
        lines.append(f"{key}: {value}")
    lines.append("---")
    lines.append("")
    lines.append(body)
    return "\n".join(lines)


def site_files(articles: Dict[str, str], manifest: Any = None) -> Dict[str, Served]:
    """Build a served file map with a manifest listing ``articles`` in order."""

    files: Dict[str, Served] = {f"newsletters/{name}": text for name, text in articles.items()}
    files["newsletters/index.json"] = json.dumps(list(articles) if manifest is None else manifest)
    return files


@pytest.fixture
def config() -> SiteConfig:
    return SiteConfig(base_url=BASE_URL, max_workers=4)


@pytest.fixture
def make_repository(config: SiteConfig):
    def factory(files: Dict[str, Served]) -> tuple[ArticleRepository, FakeSession]:
        session = FakeSession(files)
        client = SiteClient.from_config(config, session=session)
        return ArticleRepository(client, config), session

    return factory
