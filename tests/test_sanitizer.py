"""Unit tests for the static-export sanitizer.

The sanitizer rewrites rendered ``.html`` files in place to drop the generator's
title suffix. These tests check idempotence, that other files are never
touched, traversal order, configurable rules, and that I/O and decoding
failures abort the pass.

Usage
-----
Run ``pytest tests/test_sanitizer.py -v``.
"""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from sp8d_pages._constants import NEXTRA_TITLE_MARKER
from sp8d_pages.sanitizer import OutputSanitizer, ReplacementRule

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

PAGE_HTML = (
    "<html><head><title>Install SP8D" + NEXTRA_TITLE_MARKER + "</title>"
    '<meta property="og:title" content="Install SP8D' + NEXTRA_TITLE_MARKER + '">'
    "</head><body><h1>Install SP8D</h1></body></html>"
)


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    """Lay out a small static export with nested HTML and non-HTML files."""
    out = tmp_path / "out"
    (out / "quickstart" / "installation").mkdir(parents=True)
    (out / "_next" / "static").mkdir(parents=True)
    (out / "index.html").write_text(PAGE_HTML, encoding="utf-8")
    (out / "quickstart" / "installation" / "index.html").write_text(
        PAGE_HTML, encoding="utf-8"
    )
    (out / "_next" / "static" / "chunk.js").write_text(
        f"const title = 'Docs{NEXTRA_TITLE_MARKER}';", encoding="utf-8"
    )
    (out / "notes.htm").write_text(PAGE_HTML, encoding="utf-8")
    return out


def test_marker_removed_from_title(export_dir: Path) -> None:
    OutputSanitizer().run(export_dir)
    soup = BeautifulSoup(
        (export_dir / "quickstart" / "installation" / "index.html").read_text(
            encoding="utf-8"
        ),
        "html.parser",
    )
    assert soup.title is not None
    assert soup.title.string == "Install SP8D", (
        f"expected the suffix to be stripped, got {soup.title.string!r}"
    )
    og_title = soup.find("meta", attrs={"property": "og:title"})
    assert og_title is not None
    assert og_title.get("content") == "Install SP8D"


def test_run_returns_patched_files_depth_first(export_dir: Path) -> None:
    patched = OutputSanitizer().run(export_dir)
    assert [path.relative_to(export_dir).as_posix() for path in patched] == [
        "index.html",
        "quickstart/installation/index.html",
    ]


def test_other_extensions_left_byte_for_byte(export_dir: Path) -> None:
    others = [export_dir / "_next" / "static" / "chunk.js", export_dir / "notes.htm"]
    before = {path: path.read_bytes() for path in others}
    OutputSanitizer().run(export_dir)
    for path, content in before.items():
        assert path.read_bytes() == content, f"{path.name} should be untouched"


def test_non_matching_files_are_not_read(
    export_dir: Path, mocker: MockerFixture
) -> None:
    sanitizer = OutputSanitizer()
    patch_file = mocker.spy(sanitizer, "patch_file")
    sanitizer.run(export_dir)
    visited = {call.args[0].name for call in patch_file.call_args_list}
    assert visited == {"index.html"}
    assert patch_file.call_count == 2


def test_second_run_changes_nothing(export_dir: Path) -> None:
    sanitizer = OutputSanitizer()
    first_patched = sanitizer.run(export_dir)
    after_first = {
        path: path.read_bytes() for path in export_dir.rglob("*") if path.is_file()
    }
    second_patched = sanitizer.run(export_dir)
    after_second = {
        path: path.read_bytes() for path in export_dir.rglob("*") if path.is_file()
    }
    assert after_first == after_second
    assert first_patched == second_patched, "reruns report the same files"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "plain",
        NEXTRA_TITLE_MARKER,
        NEXTRA_TITLE_MARKER * 3,
        f"a{NEXTRA_TITLE_MARKER}b{NEXTRA_TITLE_MARKER}",
        " â€“ Nextr",
    ],
)
def test_sanitize_text_is_idempotent(text: str) -> None:
    sanitizer = OutputSanitizer()
    once = sanitizer.sanitize_text(text)
    assert sanitizer.sanitize_text(once) == once
    assert NEXTRA_TITLE_MARKER not in once


def test_line_endings_are_preserved(tmp_path: Path) -> None:
    page = tmp_path / "page.html"
    page.write_bytes(f"<title>A{NEXTRA_TITLE_MARKER}</title>\r\n".encode())
    OutputSanitizer().run(tmp_path)
    assert page.read_bytes() == b"<title>A</title>\r\n"


def test_empty_directory_performs_no_writes(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    sanitizer = OutputSanitizer()
    patch_file = mocker.spy(sanitizer, "patch_file")
    assert sanitizer.run(tmp_path) == []
    assert patch_file.call_count == 0


def test_missing_root_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        OutputSanitizer().run(tmp_path / "missing")


def test_root_must_be_directory(tmp_path: Path) -> None:
    target = tmp_path / "index.html"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        OutputSanitizer().run(target)


def test_undecodable_file_aborts_pass(tmp_path: Path) -> None:
    (tmp_path / "a.html").write_bytes(b"\xff\xfe\xfa broken")
    later = tmp_path / "b.html"
    later.write_text(f"x{NEXTRA_TITLE_MARKER}", encoding="utf-8")
    with pytest.raises(UnicodeDecodeError):
        OutputSanitizer().run(tmp_path)
    assert later.read_text(encoding="utf-8") == f"x{NEXTRA_TITLE_MARKER}", (
        "files after the failure must not be visited"
    )


def test_rules_apply_in_order(tmp_path: Path) -> None:
    page = tmp_path / "page.html"
    page.write_text("<title>Docs | Old Brand</title>", encoding="utf-8")
    sanitizer = OutputSanitizer(
        [
            ReplacementRule(" | Old Brand", " | SP8D"),
            ReplacementRule(r"\| (SP8D)", r"- \1", regex=True),
        ]
    )
    sanitizer.run(tmp_path)
    assert page.read_text(encoding="utf-8") == "<title>Docs - SP8D</title>"


def test_custom_suffix(tmp_path: Path) -> None:
    (tmp_path / "feed.xml").write_text(f"t{NEXTRA_TITLE_MARKER}", encoding="utf-8")
    patched = OutputSanitizer(suffix=".xml").run(tmp_path)
    assert [path.name for path in patched] == ["feed.xml"]
    assert (tmp_path / "feed.xml").read_text(encoding="utf-8") == "t"


@pytest.mark.parametrize(
    ("pattern", "regex"),
    [("", False), ("(", True)],
)
def test_invalid_rules_are_rejected(pattern: str, regex: bool) -> None:
    with pytest.raises(ValueError):
        ReplacementRule(pattern, regex=regex)


def test_bad_group_reference_in_replacement_is_rejected() -> None:
    with pytest.raises(ValueError, match="invalid group reference"):
        ReplacementRule("keep", r"\1", regex=True)


def test_failing_rule_leaves_file_intact(tmp_path: Path, mocker: MockerFixture) -> None:
    page = tmp_path / "index.html"
    page.write_text("<title>keep me</title>", encoding="utf-8")
    mocker.patch.object(ReplacementRule, "apply", side_effect=RuntimeError("boom"))

    with pytest.raises(RuntimeError, match="boom"):
        OutputSanitizer().run(tmp_path)

    assert page.read_text(encoding="utf-8") == "<title>keep me</title>"
