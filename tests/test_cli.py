"""Tests for the ``menu`` CLI commands.

The HTTP transport is swapped for the scripted fake so ``menu render`` runs
the real controller, renderer, and page loading without network access.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from wiki_menu import cli
from wiki_menu.errors import PlaceholderNotFoundError


@pytest.fixture
def patched_transport(
    monkeypatch: pytest.MonkeyPatch, scripted_transport: typ.Any
) -> typ.Callable[..., typ.Any]:
    """Install a scripted transport in place of ``RequestsTransport``."""
    created: dict[str, typ.Any] = {}

    def _install(*outcomes: str | None) -> dict[str, typ.Any]:
        transport = scripted_transport(*outcomes)
        transport.close = lambda: None

        def _factory(base_url: str, **kwargs: typ.Any) -> typ.Any:
            created["base_url"] = base_url
            created["kwargs"] = kwargs
            return transport

        monkeypatch.setattr(cli, "RequestsTransport", _factory)
        created["transport"] = transport
        return created

    return _install


def test_render_writes_skeleton_page(
    tmp_path: Path,
    patched_transport: typ.Any,
    sidebar_markup: str,
    capsys: pytest.CaptureFixture[str],
) -> None:
    created = patched_transport(sidebar_markup)
    output = tmp_path / "out" / "menu.html"

    cli.render(output=output, username="Alice")

    assert "wrote" in capsys.readouterr().out
    soup = BeautifulSoup(output.read_text(encoding="utf-8"), "html.parser")
    container = soup.select_one(".navigation-drawer > div.menu.view-border-box")
    assert container is not None
    assert soup.select_one(".menu-placeholder") is None
    labels = [a.get_text() for a in container.select("a")]
    assert labels == [
        "Main page",
        "Recent changes",
        "Random page",
        "Watchlist",
        "Upload",
        "Settings",
    ]
    assert created["base_url"] == "https://psychonautwiki.org"


def test_render_reads_user_from_page(
    tmp_path: Path, patched_transport: typ.Any, sidebar_markup: str
) -> None:
    patched_transport(sidebar_markup)
    page = tmp_path / "index.html"
    page.write_text(
        "<html><head><script>RLCONF={\"wgUserName\":null};</script></head>"
        '<body><div class="navigation-drawer"><div class="menu"></div></div></body></html>',
        encoding="utf-8",
    )

    cli.render(page=page)

    soup = BeautifulSoup(page.read_text(encoding="utf-8"), "html.parser")
    labels = [a.get_text() for a in soup.select("div.menu a")]
    assert "Watchlist" not in labels
    assert labels[0] == "Main page"


def test_render_honours_config_and_source_override(
    tmp_path: Path, patched_transport: typ.Any
) -> None:
    created = patched_transport(None)
    config = tmp_path / "menu.yaml"
    config.write_text("max_attempts: 1\ntimeout: 3\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.render(config=config, source_url="https://mirror.example/", output=tmp_path / "x.html")

    assert excinfo.value.code == 1
    assert created["base_url"] == "https://mirror.example"
    assert created["kwargs"] == {"timeout": 3.0}
    assert len(created["transport"].calls) == 1
    assert not (tmp_path / "x.html").exists()


def test_render_failure_reports_state(
    tmp_path: Path, patched_transport: typ.Any, capsys: pytest.CaptureFixture[str]
) -> None:
    created = patched_transport(None)

    with pytest.raises(SystemExit):
        cli.render(output=tmp_path / "menu.html")

    assert "menu not rendered (terminal_error)" in capsys.readouterr().out
    assert len(created["transport"].calls) == 3


def test_render_without_placeholder_fails(tmp_path: Path, patched_transport: typ.Any) -> None:
    patched_transport("* navigation")
    page = tmp_path / "index.html"
    page.write_text("<html><body><p>No menu</p></body></html>", encoding="utf-8")

    with pytest.raises(PlaceholderNotFoundError):
        cli.render(page=page)


def test_parse_prints_sections_as_json(
    tmp_path: Path, sidebar_markup: str, capsys: pytest.CaptureFixture[str]
) -> None:
    source = tmp_path / "Sidebar.txt"
    source.write_text(sidebar_markup, encoding="utf-8")

    cli.parse_markup(source)

    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["title"] == "navigation"
    assert payload[0]["items"][0] == {"link": "Main_Page", "label": "Main page"}
    assert [section["title"] for section in payload] == ["navigation", "Tools"]
