"""Tests for the ``sp8d-pages`` command functions.

Commands are called directly (the Cyclopts decorators return the original
functions) inside a temporary working directory seeded with a copy of the
repository's ``pages/`` content tree.
"""

from __future__ import annotations

import shutil
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest

from sp8d_pages import cli
from sp8d_pages._constants import NEXTRA_TITLE_MARKER
from sp8d_pages.routes import RouteTreeError

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def site_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Copy the site config and content into ``tmp_path`` and chdir there."""
    shutil.copytree(REPO_ROOT / "pages", tmp_path / "pages")
    shutil.copytree(REPO_ROOT / "config", tmp_path / "config")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_routes_writes_page_map(site_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.routes()
    page_map_path = site_dir / "build" / "page-map.json"
    assert capsys.readouterr().out.strip() == "wrote build/page-map.json"

    page_map: dict[str, typ.Any] = msgspec_json.decode(page_map_path.read_bytes())
    assert page_map["route"] == "/"
    assert page_map["title"] == "SP8D Ultra-Low-Latency Web IPC"
    names = [child["name"] for child in page_map["children"]]
    assert names == [
        "index",
        "introduction",
        "quickstart",
        "principles",
        "protocol-internals",
        "api-reference",
        "guides-and-howtos",
        "examples",
        "testHarness",
        "contact",
    ]
    quickstart = page_map["children"][2]
    assert [child["route"] for child in quickstart["children"]] == [
        "/quickstart/common-recipes",
        "/quickstart/installation",
        "/quickstart/minimal-example",
    ]
    installation = quickstart["children"][1]
    assert installation["frontMatter"] == {
        "title": "Install SP8D",
        "canonical": "https://sp8d.github.io/quickstart/installation",
    }
    harness = page_map["children"][8]
    assert harness == {
        "name": "testHarness",
        "kind": "link",
        "title": "Test Harness",
        "target": "https://harness.sp8d.com",
        "openInNewContext": True,
    }


def test_routes_lenient_skips_missing_pages(site_dir: Path) -> None:
    meta = site_dir / "pages" / "examples" / "_meta.yaml"
    meta.write_text("basic-spsc: Basic SPSC\nmpmc: MPMC\n", encoding="utf-8")

    with pytest.raises(RouteTreeError, match="'mpmc' under '/examples'"):
        cli.routes()

    output = site_dir / "lenient.json"
    cli.routes(lenient=True, output=output)
    page_map = msgspec_json.decode(output.read_bytes())
    examples = next(c for c in page_map["children"] if c["name"] == "examples")
    assert [child["name"] for child in examples["children"]] == ["basic-spsc"]


def test_sanitize_reports_each_patched_file(
    site_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out = site_dir / "out"
    (out / "quickstart").mkdir(parents=True)
    (out / "index.html").write_text(f"<title>Home{NEXTRA_TITLE_MARKER}</title>", encoding="utf-8")
    (out / "quickstart" / "index.html").write_text("<title>Quickstart</title>", encoding="utf-8")

    cli.sanitize()

    assert capsys.readouterr().out.splitlines() == [
        "patched out/index.html",
        "patched out/quickstart/index.html",
    ]
    assert (out / "index.html").read_text(encoding="utf-8") == "<title>Home</title>"


def test_sanitize_missing_output_dir_fails(site_dir: Path) -> None:
    with pytest.raises(FileNotFoundError):
        cli.sanitize(output_dir=site_dir / "missing")


def test_postbuild_writes_sitemap_then_sanitizes(
    site_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    out = site_dir / "out"
    out.mkdir()
    (out / "index.html").write_text(f"<title>Home{NEXTRA_TITLE_MARKER}</title>", encoding="utf-8")

    cli.postbuild()

    assert capsys.readouterr().out.splitlines() == [
        "wrote out/sitemap.xml",
        "wrote out/robots.txt",
        "patched out/index.html",
    ]
    sitemap = (out / "sitemap.xml").read_text(encoding="utf-8")
    assert "<loc>https://sp8d.github.io/</loc>" in sitemap
    assert "<loc>https://sp8d.github.io/quickstart/installation/</loc>" in sitemap
    assert "harness" not in sitemap


def test_defaults_apply_without_config_file(
    site_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    shutil.rmtree(site_dir / "config")
    cli.sitemap(output_dir=site_dir / "public")
    assert capsys.readouterr().out.splitlines() == [
        "wrote public/sitemap.xml",
        "wrote public/robots.txt",
    ]
