"""Site settings shared by the pipeline, the preview CLI and the validator."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .errors import ConfigError

try:
    from dotenv import load_dotenv
except ImportError:
    load_dotenv = None  # type: ignore


@dataclass(slots=True, frozen=True)
class SiteConfig:
    """Locations and page limits for one magazine site.

    Parameters
    ----------
    base_url:
        Root URL the site's static files are served from.
    manifest_path:
        Site-relative path of the JSON manifest listing article files.
    news_dir:
        Directory prefix applied to manifest entries that are not already
        namespaced under it.
    default_thumbnail:
        Image used when an article has no ``Thumbnail``.
    home_latest_limit, sidebar_latest_limit:
        Size of the home page grid and sidebar windows (both start after the
        top stories and overlap).
    timeout:
        Optional per-request timeout in seconds. ``None`` waits indefinitely.
    max_workers:
        Thread pool size used to fetch articles concurrently.
    """

    base_url: str = "http://localhost:8000"
    manifest_path: str = "newsletters/index.json"
    news_dir: str = "newsletters/"
    default_thumbnail: str = "thumbnails/placeholder.png"
    site_name: str = "Sleepy Hallow Media"
    home_latest_limit: int = 12
    sidebar_latest_limit: int = 8
    top_stories_limit: int = 4
    trending_tags_limit: int = 6
    tag_cloud_limit: int = 20
    words_per_minute: int = 200
    date_format: str = "%x"
    timeout: float | None = None
    max_workers: int = 8


_ENV_OVERRIDES = {
    "NEWSDESK_URL": "base_url",
    "NEWSDESK_MANIFEST": "manifest_path",
    "NEWSDESK_NEWS_DIR": "news_dir",
    "NEWSDESK_TIMEOUT": "timeout",
}


def _coerce(name: str, value: Any) -> Any:
    if name == "timeout":
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"timeout must be a number, got {value!r}") from exc
    if name in {
        "home_latest_limit",
        "sidebar_latest_limit",
        "top_stories_limit",
        "trending_tags_limit",
        "tag_cloud_limit",
        "words_per_minute",
        "max_workers",
    }:
        if isinstance(value, bool):
            raise ConfigError(f"{name} must be an integer, got {value!r}")
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
        if number < 0 or (name in {"words_per_minute", "max_workers"} and number == 0):
            raise ConfigError(f"{name} must be positive, got {number}")
        return number
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string, got {type(value).__name__}")
    return value


def config_from_mapping(data: Mapping[str, Any], base: SiteConfig | None = None) -> SiteConfig:
    """Return ``base`` (or the defaults) updated with the keys in ``data``."""

    known = {f.name for f in fields(SiteConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
    values: Dict[str, Any] = {name: _coerce(name, value) for name, value in data.items()}
    return replace(base or SiteConfig(), **values)


def load_config(
    path: str | Path | None = None,
    *,
    load_env: bool = True,
    environ: Mapping[str, str] | None = None,
) -> SiteConfig:
    """Build a :class:`SiteConfig` from an optional YAML file and the environment.

    Parameters
    ----------
    path:
        Optional YAML document containing a mapping of :class:`SiteConfig`
        field names to values.
    load_env:
        Whether to load a ``.env`` file first if python-dotenv is available.
    environ:
        Mapping consulted for ``NEWSDESK_*`` overrides. Defaults to
        ``os.environ``.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not a YAML mapping, or holds invalid
        values.
    """

    config = SiteConfig()

    if path is not None:
        config_path = Path(path)
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read configuration file '{config_path}': {exc}") from exc
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse YAML in '{config_path}': {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration in '{config_path}' must be a YAML mapping, got: {type(data).__name__}."
            )
        config = config_from_mapping(data, config)

    if load_env and load_dotenv is not None and environ is None:
        load_dotenv()

    env = os.environ if environ is None else environ
    overrides = {field: env[var] for var, field in _ENV_OVERRIDES.items() if env.get(var)}
    if overrides:
        config = config_from_mapping(overrides, config)
    return config
