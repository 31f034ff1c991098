from __future__ import annotations

from datetime import datetime

import pytest

from conftest import article_text
from newsdesk.articles import build_article, sort_articles
from newsdesk.config import SiteConfig
from newsdesk.views import (
    article_url,
    build_article_view,
    build_card,
    build_home_view,
    build_list_view,
    format_date,
    reading_time,
    resolve_thumbnail,
)

ISO_CONFIG = SiteConfig(date_format="%Y-%m-%d")


def _collection(count: int):
    return sort_articles(
        build_article(f"{n:02d}.txt", article_text(f"Story {n}", date=f"2024-01-{n + 1:02d}", Tags=f"t{n % 2}"))
        for n in range(count)
    )


def test_home_view_slices() -> None:
    articles = _collection(20)

    view = build_home_view(articles, ISO_CONFIG)

    assert view.lead.file == articles[0].file
    assert [c.file for c in view.top_stories] == [a.file for a in articles[1:5]]
    assert [c.file for c in view.latest] == [a.file for a in articles[5:17]]
    assert [c.file for c in view.sidebar] == [a.file for a in articles[5:13]]
    assert not view.is_empty


def test_home_view_windows_overlap() -> None:
    view = build_home_view(_collection(9), SiteConfig(home_latest_limit=3, sidebar_latest_limit=2))

    assert len(view.latest) == 3
    assert len(view.sidebar) == 2
    assert view.sidebar[0].file == view.latest[0].file


def test_home_view_small_and_empty_collections() -> None:
    small = build_home_view(_collection(2))
    assert len(small.top_stories) == 1
    assert small.latest == [] and small.sidebar == []

    empty = build_home_view([])
    assert empty.is_empty
    assert empty.lead is None
    assert empty.trending_tags == []


def test_trending_tags() -> None:
    articles = [
        build_article("1.txt", article_text("One", Tags="a, b")),
        build_article("2.txt", article_text("Two", Tags="a")),
        build_article("3.txt", article_text("Three", Tags="c")),
    ]

    trending = build_home_view(articles).trending_tags

    assert [t.label for t in trending] == ["a", "b", "c"]
    assert [t.count for t in trending] == [2, 1, 1]
    assert trending[0].url == "newsletters.html?tag=a"


def test_trending_tags_limited_to_six() -> None:
    articles = [build_article(f"{n}.txt", article_text(f"N{n}", Tags=f"tag{n}")) for n in range(9)]

    assert len(build_home_view(articles).trending_tags) == 6


def test_card_fields_and_fallbacks() -> None:
    article = build_article(
        "2024/spring fair.txt",
        article_text(None, date="2024-03-01", Tags="Local, News, Events", Category="Community", Subtitle="Sub"),
    )

    card = build_card(article, ISO_CONFIG)

    assert card.title == "2024/spring fair.txt"
    assert card.author == "Staff"
    assert card.date_text == "2024-03-01"
    assert card.byline == "2024-03-01 • Staff"
    assert card.chips == ["Local", "News"]
    assert card.thumbnail == "thumbnails/placeholder.png"
    assert card.url == "article.html?article=2024%2Fspring%20fair.txt"
    assert card.category == "Community"
    assert card.subtitle == "Sub"


def test_card_byline_without_date() -> None:
    card = build_card(build_article("x.txt", article_text("X", Author="Ada")), ISO_CONFIG)

    assert card.byline == "Ada"
    assert card.date_text == ""


def _list_fixture():
    return sort_articles(
        [
            build_article("arts-1.txt", article_text("Gallery opening", date="2024-03-01", Category="Arts", Tags="Local, Events")),
            build_article("arts-2.txt", article_text("Festival of light", date="2024-02-01", Category="arts", Tags="Events")),
            build_article("sport-1.txt", article_text("Festival run", date="2024-01-01", Category="Sports", Tags="Local")),
            build_article("misc.txt", article_text("Notes", Subtitle="festival leftovers")),
        ]
    )


def test_list_view_without_filters_lists_everything() -> None:
    articles = _list_fixture()

    view = build_list_view(articles, ISO_CONFIG)

    assert [c.file for c in view.articles] == [a.file for a in articles]
    assert view.summary == ""
    assert view.empty_message == ""
    assert view.count == 4


def test_list_view_applies_category_then_tags_then_search() -> None:
    view = build_list_view(_list_fixture(), ISO_CONFIG, query="festival", category="ARTS", tags="events")

    assert [c.file for c in view.articles] == ["arts-2.txt"]
    assert view.tags == ["events"]
    assert view.summary == "1 result(s) — “festival” • Category: ARTS • Tags: events"


def test_list_view_search_ranks_results() -> None:
    view = build_list_view(_list_fixture(), ISO_CONFIG, query="festival")

    assert [c.file for c in view.articles] == ["arts-2.txt", "sport-1.txt", "misc.txt"]


def test_list_view_tags_sequence_and_empty_message() -> None:
    view = build_list_view(_list_fixture(), ISO_CONFIG, category="Music", tags=["Jazz"])

    assert view.articles == []
    assert view.empty_message == "No items found in Music with tags: jazz."


def test_list_view_facets_and_tag_cloud_links() -> None:
    view = build_list_view(_list_fixture(), ISO_CONFIG, query="fest", tags="local")

    assert [(f.label, f.count) for f in view.category_facets] == [("Arts", 1), ("arts", 1), ("Sports", 1)]
    assert view.category_facets[0].url == "newsletters.html?category=Arts"

    cloud = {link.label: link for link in view.tag_cloud}
    assert cloud["Local"].active
    assert cloud["Local"].url == "newsletters.html?q=fest"
    assert not cloud["Events"].active
    assert cloud["Events"].url == "newsletters.html?q=fest&tag=local%2Cevents"


def test_article_view() -> None:
    body = " ".join(["word"] * 400)
    article = build_article(
        "issue.txt",
        article_text("Issue 1", date="2024-03-01", body=body, Tags="Local", Thumbnail="/img/hero.png"),
    )

    view = build_article_view(article, ISO_CONFIG)

    assert view.title == "Issue 1"
    assert view.reading_time == "2 min read"
    assert view.thumbnail == "/img/hero.png"
    assert view.byline == "2024-03-01 • Staff"
    assert [(t.label, t.url) for t in view.tags] == [("Local", "newsletters.html?tag=Local")]
    assert view.page_title == "Issue 1 - Sleepy Hallow Media"


def test_article_view_untitled() -> None:
    view = build_article_view(build_article("raw.txt", "Just text."))

    assert view.title == "Untitled"
    assert view.page_title == "raw.txt - Sleepy Hallow Media"
    assert view.tags == []


@pytest.mark.parametrize(
    ("words", "expected"),
    [(0, "1 min read"), (50, "1 min read"), (299, "1 min read"), (300, "2 min read"), (400, "2 min read"), (1000, "5 min read")],
)
def test_reading_time(words: int, expected: str) -> None:
    assert reading_time("\n  ".join(["w"] * words)) == expected


def test_reading_time_custom_rate() -> None:
    assert reading_time(" ".join(["w"] * 400), words_per_minute=100) == "4 min read"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://cdn.example.com/a.png", "https://cdn.example.com/a.png"),
        ("//cdn.example.com/a.png", "//cdn.example.com/a.png"),
        ("/thumbnails/a.png", "/thumbnails/a.png"),
        ("thumbnails/a.png", "thumbnails/a.png"),
        (" a.png ", "a.png"),
        ("", "thumbnails/placeholder.png"),
        (None, "thumbnails/placeholder.png"),
    ],
)
def test_resolve_thumbnail(value: str | None, expected: str) -> None:
    assert resolve_thumbnail(value) == expected


def test_resolve_thumbnail_configured_default() -> None:
    assert resolve_thumbnail(None, SiteConfig(default_thumbnail="img/none.png")) == "img/none.png"


def test_format_date() -> None:
    assert format_date("2024-03-01", ISO_CONFIG) == "2024-03-01"
    assert format_date("garbage", ISO_CONFIG) == ""
    assert format_date(None) == ""
    assert format_date("2024-03-01") == datetime(2024, 3, 1).strftime("%x")


def test_article_url_encodes_everything() -> None:
    assert article_url("a&b?.txt") == "article.html?article=a%26b%3F.txt"
