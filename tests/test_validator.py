from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from newsdesk.errors import ValidationRunError
from newsdesk.validator import main, validate_date, validate_site

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def write_site(root: Path, manifest: object, articles: dict[str, str]) -> Path:
    news = root / "newsletters"
    news.mkdir(parents=True, exist_ok=True)
    (news / "index.json").write_text(
        manifest if isinstance(manifest, str) else json.dumps(manifest),
        encoding="utf-8",
    )
    for name, text in articles.items():
        path = news / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


def test_valid_site_passes(tmp_path: Path) -> None:
    write_site(
        tmp_path,
        ["a.txt", "newsletters/b.txt"],
        {
            "a.txt": "---\nTitle: A\nDate: 2024-05-01\nHidden: no\n---\nBody",
            "b.txt": "---\nTitle: B\nDraft: TRUE\n---\nBody",
        },
    )

    report = validate_site(tmp_path, now=NOW)

    assert report.errors == []
    assert report.warnings == []
    assert report.checked == 2
    assert report.exit_code == 0


def test_errors_and_warnings(tmp_path: Path) -> None:
    write_site(
        tmp_path,
        ["bad-date.txt", 3, "missing.txt", "untitled.md", "future.txt", "flags.txt", "../escape.txt"],
        {
            "bad-date.txt": "---\nTitle: Bad\nDate: 2024-02-30\n---\n",
            "untitled.md": "no header at all",
            "future.txt": "---\nTitle: Soon\nDate: 2024-06-04\n---\n",
            "flags.txt": "---\nTitle: Flags\nHidden: maybe\nDraft: sometimes\n---\n",
        },
    )

    report = validate_site(tmp_path, now=NOW)

    assert report.errors == [
        "bad-date.txt: Date must be YYYY-MM-DD (got: 2024-02-30)",
        "Manifest contains non-string entry: 3",
        "Missing or unreadable file listed in manifest: missing.txt",
        "../escape.txt: invalid article path",
    ]
    assert report.warnings == [
        "untitled.md: not a .txt file (allowed, but check generator configuration)",
        "untitled.md: missing Title in frontmatter",
        "future.txt: Date appears to be in the future (2024-06-04)",
        "flags.txt: Hidden should be boolean-ish (true/false/yes/no/0/1)",
        "flags.txt: Draft should be boolean-ish (true/false/yes/no/0/1)",
    ]
    assert report.exit_code == 2


def test_date_within_36_hours_is_not_future(tmp_path: Path) -> None:
    write_site(tmp_path, ["a.txt"], {"a.txt": "---\nTitle: A\nDate: 2024-06-02\n---\n"})

    assert validate_site(tmp_path, now=NOW).warnings == []


def test_empty_manifest_warns(tmp_path: Path) -> None:
    write_site(tmp_path, [], {})

    report = validate_site(tmp_path, now=NOW)

    assert report.warnings == ["Warning: manifest is empty"]
    assert report.ok


@pytest.mark.parametrize("manifest", ["{not json", '{"a": 1}', '"a.txt"'])
def test_unusable_manifest_raises(tmp_path: Path, manifest: str) -> None:
    write_site(tmp_path, manifest, {})

    with pytest.raises(ValidationRunError):
        validate_site(tmp_path)


def test_missing_manifest_raises(tmp_path: Path) -> None:
    with pytest.raises(ValidationRunError):
        validate_site(tmp_path)


@pytest.mark.parametrize(
    ("value", "valid"),
    [("2024-01-31", True), ("2024-02-29", True), ("2023-02-29", False), ("2024-1-01", False), ("01/02/2024", False)],
)
def test_validate_date(value: str, valid: bool) -> None:
    assert (validate_date(value) is not None) is valid


def test_main_exit_codes(tmp_path: Path, capsys) -> None:
    good = write_site(tmp_path / "good", ["a.txt"], {"a.txt": "---\nTitle: A\n---\nBody"})
    bad = write_site(tmp_path / "bad", ["missing.txt"], {})
    broken = write_site(tmp_path / "broken", "[oops", {})

    assert main([str(good)]) == 0
    assert "Validation passed" in capsys.readouterr().out

    assert main([str(bad)]) == 2
    assert "missing.txt" in capsys.readouterr().err

    assert main([str(broken)]) == 1
    assert "Invalid JSON" in capsys.readouterr().err


def test_main_with_config_file(tmp_path: Path) -> None:
    site = tmp_path / "site"
    (site / "posts").mkdir(parents=True)
    (site / "posts" / "list.json").write_text('["a.txt"]', encoding="utf-8")
    (site / "posts" / "a.txt").write_text("---\nTitle: A\n---\n", encoding="utf-8")
    config = tmp_path / "site.yaml"
    config.write_text("manifest_path: posts/list.json\nnews_dir: posts/\n", encoding="utf-8")

    assert main([str(site), "--config", str(config)]) == 0
