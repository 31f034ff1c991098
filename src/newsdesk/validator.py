"""Validate a site's article manifest and front matter on local disk.

Exit status:

* ``0`` - no validation errors (warnings are allowed)
* ``2`` - at least one validation error
* ``1`` - the check could not run (manifest unreadable or not a JSON array)
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, List, Sequence

from .config import SiteConfig, load_config
from .errors import ConfigError, ValidationRunError
from .file_parser import is_boolish, parse_article_file
from .manifest import article_path, sanitize_filename

logger = logging.getLogger(__name__)

_YMD_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
FUTURE_TOLERANCE = timedelta(hours=36)


@dataclass(slots=True)
class ValidationReport:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 2


def validate_date(value: str) -> date | None:
    """Return the calendar date for a strict ``YYYY-MM-DD`` value, else ``None``."""

    text = value.strip()
    if not _YMD_PATTERN.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def load_local_manifest(root: Path, config: SiteConfig) -> List[Any]:
    """Read the manifest from ``root``.

    Raises
    ------
    ValidationRunError
        If the manifest cannot be read, is not JSON, or is not a JSON array.
    """

    manifest_path = root / config.manifest_path
    try:
        raw = manifest_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValidationRunError(f"Failed to load {config.manifest_path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ValidationRunError(f"Invalid JSON in {config.manifest_path}: {exc}") from exc
    if not isinstance(data, list):
        raise ValidationRunError(f"{config.manifest_path} is not an array")
    return data


def validate_site(
    root: str | Path,
    config: SiteConfig | None = None,
    *,
    now: datetime | None = None,
) -> ValidationReport:
    """Check every manifest entry under the site directory ``root``.

    Parameters
    ----------
    root:
        Site directory containing the manifest and the news directory.
    config:
        Locations of the manifest and articles. Defaults to :class:`SiteConfig`.
    now:
        Reference time for the future-date warning. Defaults to the current
        UTC time.
    """

    config = config or SiteConfig()
    root = Path(root)
    now = now or datetime.now(timezone.utc)
    report = ValidationReport()

    manifest = load_local_manifest(root, config)
    if not manifest:
        report.warnings.append("Warning: manifest is empty")

    for entry in manifest:
        if not isinstance(entry, str):
            report.errors.append(f"Manifest contains non-string entry: {entry!r}")
            continue
        report.checked += 1
        logger.debug("Checking manifest entry %s", entry)

        if not entry.lower().endswith(".txt"):
            report.warnings.append(
                f"{entry}: not a .txt file (allowed, but check generator configuration)"
            )

        safe = sanitize_filename(entry)
        if not safe:
            report.errors.append(f"{entry}: invalid article path")
            continue

        try:
            document = parse_article_file(root / article_path(safe, config))
        except (OSError, UnicodeDecodeError):
            report.errors.append(f"Missing or unreadable file listed in manifest: {entry}")
            continue

        meta = document.meta
        if not meta.title:
            report.warnings.append(f"{entry}: missing Title in frontmatter")

        if meta.date:
            parsed = validate_date(meta.date)
            if parsed is None:
                report.errors.append(f"{entry}: Date must be YYYY-MM-DD (got: {meta.date})")
            else:
                midnight = datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc)
                if midnight - now > FUTURE_TOLERANCE:
                    report.warnings.append(f"{entry}: Date appears to be in the future ({meta.date})")

        for key in ("Hidden", "Draft"):
            if not is_boolish(meta.get(key)):
                report.warnings.append(
                    f"{entry}: {key} should be boolean-ish (true/false/yes/no/0/1)"
                )

    return report


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the validation command."""

    parser = argparse.ArgumentParser(
        description="Validate the article manifest and front matter of a magazine site.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Site directory containing the manifest (default: current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file with site settings (manifest_path, news_dir, ...)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        report = validate_site(args.root, config)
    except (ValidationRunError, ConfigError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    for warning in report.warnings:
        print(f"⚠ {warning}", file=sys.stderr)
    for error in report.errors:
        print(f"✗ {error}", file=sys.stderr)

    if not report.ok:
        print(f"\n✗ {len(report.errors)} validation error(s)", file=sys.stderr)
        return report.exit_code

    print("Validation passed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
