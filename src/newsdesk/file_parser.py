"""Utilities for parsing article documents with ``key: value`` front matter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping
import re

_KEY_VALUE_PATTERN = re.compile(r"^([^:]+?)\s*:\s*(.*)$")
_TRUTHY_PATTERN = re.compile(r"^(true|yes|1)$", re.IGNORECASE)
_BOOLISH_PATTERN = re.compile(r"^(true|false|yes|no|0|1)$", re.IGNORECASE)

# Header keys mapped onto named FrontMatter fields.
_FIELD_KEYS = {
    "Title": "title",
    "Subtitle": "subtitle",
    "Author": "author",
    "Category": "category",
    "Tags": "tags",
    "Date": "date",
    "Thumbnail": "thumbnail",
    "Hidden": "hidden",
    "Draft": "draft",
}

_DATE_FORMATS = (
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


@dataclass(frozen=True, slots=True)
class FrontMatter:
    """Raw string metadata read from an article header.

    Recognized keys land in named fields; anything else is kept verbatim in
    ``extra``. No value is coerced here, see :func:`is_truthy`,
    :func:`split_tags` and :func:`parse_date`.
    """

    title: str | None = None
    subtitle: str | None = None
    author: str | None = None
    category: str | None = None
    tags: str | None = None
    date: str | None = None
    thumbnail: str | None = None
    hidden: str | None = None
    draft: str | None = None
    extra: Mapping[str, str] = field(default_factory=dict, hash=False)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "FrontMatter":
        known: Dict[str, str] = {}
        extra: Dict[str, str] = {}
        for key, value in values.items():
            attr = _FIELD_KEYS.get(key)
            if attr is None:
                extra[key] = value
            else:
                known[attr] = value
        return cls(**known, extra=extra)

    def as_dict(self) -> Dict[str, str]:
        """Return the header as it was written (recognized and extra keys)."""

        result: Dict[str, str] = {}
        for key, attr in _FIELD_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        result.update(self.extra)
        return result

    def get(self, key: str, default: str | None = None) -> str | None:
        attr = _FIELD_KEYS.get(key)
        if attr is not None:
            value = getattr(self, attr)
            return default if value is None else value
        return self.extra.get(key, default)


@dataclass(frozen=True, slots=True)
class ParsedText:
    meta: FrontMatter
    body: str


@dataclass(slots=True)
class ArticleDocument:
    """Represents an article file read from local storage."""

    meta: FrontMatter
    body: str
    raw: str
    path: Path


def _normalize(text: Any) -> str:
    source = "" if text is None else str(text)
    if source.startswith("\ufeff"):
        source = source[1:]
    return source.replace("\r", "").lstrip()


def parse_front_matter(text: Any) -> ParsedText:
    """Split raw article text into front matter and body.

    The header must open the text with a ``---`` line and is closed by the
    next line that is exactly ``---``. Lines in between of the form
    ``key: value`` become metadata (later duplicates win); blank or malformed
    lines are skipped. Text that does not start with the delimiter has no
    metadata and is returned trimmed as the body. This function never raises.
    """

    src = _normalize(text)
    if not src.startswith("---\n") and src != "---":
        return ParsedText(meta=FrontMatter(), body=src.strip())

    lines = src.split("\n")
    values: Dict[str, str] = {}
    index = 1
    closed = False
    while index < len(lines):
        line = lines[index].strip()
        index += 1
        if line == "---":
            closed = True
            break
        if not line:
            continue
        match = _KEY_VALUE_PATTERN.match(line)
        if match:
            key = match.group(1).strip()
            if key:
                values[key] = match.group(2).strip()

    body = "\n".join(lines[index:]).strip() if closed else ""
    return ParsedText(meta=FrontMatter.from_mapping(values), body=body)


def parse_article_file(file_path: str | Path) -> ArticleDocument:
    """Parse a local article document.

    Parameters
    ----------
    file_path:
        Path to a UTF-8 text file, optionally starting with a front matter
        block delimited by ``---`` lines.

    Raises
    ------
    OSError
        If the file cannot be read.
    """

    path = Path(file_path)
    text = path.read_text(encoding="utf-8")
    parsed = parse_front_matter(text)
    return ArticleDocument(meta=parsed.meta, body=parsed.body, raw=text, path=path)


def split_tags(value: Any) -> List[str]:
    """Split a comma separated ``Tags`` value, keeping order and duplicates."""

    if not value:
        return []
    return [part.strip() for part in str(value).split(",") if part.strip()]


def is_truthy(value: Any) -> bool:
    if value is True:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return bool(_TRUTHY_PATTERN.match(value.strip()))
    return False


def is_boolish(value: Any) -> bool:
    """Return ``True`` for absent values and recognizable boolean spellings."""

    if value is None or isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return value in (0, 1)
    if isinstance(value, str):
        return bool(_BOOLISH_PATTERN.match(value.strip()))
    return False


def parse_date(value: Any) -> datetime | None:
    """Best-effort conversion of a ``Date`` value to an aware datetime.

    Returns ``None`` for missing or unrecognized values. Naive results are
    taken to be UTC.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    parsed: datetime | None = None
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        parsed = datetime.fromisoformat(iso_text)
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
            except ValueError:
                continue
            break

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
