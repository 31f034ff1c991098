"""Preview command printing page view-models as JSON."""

from __future__ import annotations

import argparse
import json
import locale
import logging
import sys
from dataclasses import asdict, replace
from typing import Any, Dict, Sequence

from .articles import ArticleRepository
from .config import SiteConfig, load_config
from .errors import ConfigError
from .reader import ArticleReader
from .site_client import SiteClient
from .views import build_home_view, build_list_view

logger = logging.getLogger(__name__)


def use_environment_locale() -> None:
    """Format ``%x`` dates in the locale named by ``LC_ALL``/``LC_TIME``/``LANG``."""

    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as exc:
        logger.debug("Keeping the C locale for dates: %s", exc)


def _home(repository: ArticleRepository, config: SiteConfig, args: argparse.Namespace) -> Dict[str, Any]:
    view = build_home_view(repository.load_visible_sorted(), config)
    return {"is_empty": view.is_empty, **asdict(view)}


def _list(repository: ArticleRepository, config: SiteConfig, args: argparse.Namespace) -> Dict[str, Any]:
    view = build_list_view(
        repository.load_visible_sorted(),
        config,
        query=args.q,
        category=args.category,
        tags=args.tag,
    )
    return {"count": view.count, **asdict(view)}


def _article(repository: ArticleRepository, config: SiteConfig, args: argparse.Namespace) -> Dict[str, Any]:
    page = ArticleReader(repository).open(args.name)
    return asdict(page)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="newsdesk",
        description="Print the home, list or article view of a magazine site as JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Home page of a local site
  newsdesk --url http://localhost:8000 home

  # Articles tagged "local" or "events" mentioning "festival"
  newsdesk list --tag local,events --q festival

  # One article
  newsdesk article 2024-03-01-spring.txt
        """,
    )
    parser.add_argument("--config", default=None, help="YAML file with site settings")
    parser.add_argument(
        "--url",
        dest="base_url",
        default=None,
        help="Site base URL (default: from NEWSDESK_URL env var or the config file)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    home = subparsers.add_parser("home", help="Lead story, top stories, latest grid and trending tags")
    home.set_defaults(handler=_home)

    listing = subparsers.add_parser("list", help="Filtered article list")
    listing.add_argument("--q", default=None, help="Free-text search query")
    listing.add_argument("--category", default=None, help="Category filter")
    listing.add_argument("--tag", default=None, help="Comma separated tags (any match)")
    listing.set_defaults(handler=_list)

    article = subparsers.add_parser("article", help="Single article page")
    article.add_argument("name", help="Article file as listed in the manifest")
    article.set_defaults(handler=_article)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the preview command."""

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    use_environment_locale()

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"✗ {exc}", file=sys.stderr)
        return 1
    if args.base_url:
        config = replace(config, base_url=args.base_url)

    repository = ArticleRepository(SiteClient.from_config(config), config)
    result = args.handler(repository, config, args)
    print(json.dumps(result, indent=2, ensure_ascii=False))

    if args.command == "article" and result.get("status") != "ok":
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
