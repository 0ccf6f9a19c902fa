"""Unit tests for the logged-in user lookup."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from wiki_menu.page import DrawerPageBuilder
from wiki_menu.user_state import UserState


def test_username_controls_login() -> None:
    assert UserState("Alice").is_logged_in() is True
    assert UserState("Alice").get_username() == "Alice"
    assert UserState().is_logged_in() is False
    assert UserState("").is_logged_in() is False


@pytest.mark.parametrize(
    ("script", "expected"),
    [
        ('RLCONF={"wgUserName":"Bob","wgTitle":"Main"};', "Bob"),
        ('mw.config.set({"wgUserName": "O\\"Brien"});', 'O"Brien'),
        ('RLCONF={"wgUserName":null};', None),
        ("var unrelated = 1;", None),
    ],
)
def test_from_document_reads_mediawiki_config(script: str, expected: str | None) -> None:
    document = BeautifulSoup(f"<html><head><script>{script}</script></head></html>", "html.parser")
    assert UserState.from_document(document).get_username() == expected


def test_from_skeleton_page_round_trips_username() -> None:
    builder = DrawerPageBuilder()
    logged_in = BeautifulSoup(builder.render(username="Alice"), "html.parser")
    anonymous = BeautifulSoup(builder.render(), "html.parser")

    assert UserState.from_document(logged_in).get_username() == "Alice"
    assert UserState.from_document(anonymous).is_logged_in() is False
