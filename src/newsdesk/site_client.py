"""Thin HTTP client for reading a magazine site's static files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional
from urllib.parse import urljoin

import requests

if TYPE_CHECKING:  # pragma: no cover
    from .config import SiteConfig


class SiteClient:
    """Minimal client that fetches text and JSON documents by site path."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: int | float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(
        cls,
        config: "SiteConfig",
        *,
        session: requests.Session | None = None,
    ) -> "SiteClient":
        return cls(config.base_url, timeout=config.timeout, session=session)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _build_url(self, path: str) -> str:
        return urljoin(f"{self.base_url}/", path.lstrip("/"))

    def _build_headers(self, accept: str, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers: Dict[str, str] = {"Accept": accept, "Cache-Control": "no-store"}
        if extra:
            headers.update(extra)
        return headers

    def _get(
        self,
        path: str,
        *,
        accept: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        response = self.session.request(
            "GET",
            self._build_url(path),
            headers=self._build_headers(accept, headers),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def fetch_text(self, path: str) -> str:
        """Return the body of ``path`` decoded as text.

        Raises
        ------
        requests.RequestException
            If the request fails or the response status is not successful.
        """

        response = self._get(path, accept="text/plain, */*")
        if response.encoding is None or response.encoding.lower() == "iso-8859-1":
            response.encoding = "utf-8"
        return response.text

    def fetch_json(self, path: str) -> Any:
        """Return the decoded JSON document stored at ``path``.

        Raises
        ------
        requests.RequestException
            If the request fails or the response status is not successful.
        ValueError
            If the body is not valid JSON.
        """

        return self._get(path, accept="application/json").json()
