"""Renderer output shape and determinism."""
import dataclasses
import datetime
import os
from unittest.mock import patch

import pytest
from lxml import etree

from terminal_card.errors import WriteError
from terminal_card.models import Account, AggregatedStats
from terminal_card.renderer import ASCII_ART, build_svg, format_timestamp, render_svg, write_svg

SVG = "{http://www.w3.org/2000/svg}"
NOW = datetime.datetime(2006, 1, 2, 15, 4, 5)

STATS = AggregatedStats(
    account=Account(login="shv-ng", followers=10, following=2, bio="", public_repos=5),
    stars=31,
    total_commits=420,
    most_used_languages="Go, Python, Rust",
    bio="New user",
)


def test_format_timestamp():
    assert format_timestamp(NOW) == "Mon Jan 02 15:04:05 2006 on tty1"


def test_document_layout():
    root = build_svg(STATS, "shv-ng", NOW)
    assert root.tag == f"{SVG}svg"
    assert root.get("viewBox") == "0 0 1020 650"
    assert root.get("width") == "1040"
    children = list(root)
    assert children[0].tag == f"{SVG}rect"
    assert children[0].get("id") == "bg-rect"
    assert children[-1].tag == f"{SVG}style"
    assert ".profile" in children[-1].text
    text_ids = [el.get("id") for el in children[1:-1]]
    assert text_ids == [
        "text-1", "text-2", "text-3", "text-4", "text-5",
        "art", "profile-info", "reboot-message",
    ]


def test_profile_block_values():
    root = build_svg(STATS, "shv-ng", NOW)
    profile = root.find(f".//{SVG}text[@id='profile-info']")
    values = [span.text for span in profile]
    assert values == [
        "shv-ng",
        "-----------------------",
        "Bio: New user",
        "Followers: 10",
        "Following: 2",
        "Total Repo: 5",
        "Total Stars: 31",
        "Total Commits: 420",
        "Most used language: Go, Python, Rust",
    ]
    assert [span.get("dy") for span in profile][2] == "2.3em"
    assert all(span.get("x") == "400" for span in profile)


def test_prompt_and_art():
    root = build_svg(STATS, "shv-ng", NOW)
    prompt = root.find(f".//{SVG}text[@id='text-5']")
    assert prompt.text == "[shv-ng@github ~]$ "
    assert prompt[0].get("class") == "command"
    assert prompt[0].get("x") is None

    art = root.find(f".//{SVG}text[@id='art']")
    assert art.text is None
    assert [span.text for span in art] == list(ASCII_ART)
    assert len(art) == 13


def test_render_is_deterministic_for_frozen_clock():
    first = render_svg(STATS, "shv-ng", NOW)
    second = render_svg(STATS, "shv-ng", NOW)
    assert first == second
    assert first.startswith(b"<?xml version='1.0'")
    assert b"<![CDATA[" in first

    later = render_svg(STATS, "shv-ng", NOW + datetime.timedelta(minutes=1))
    assert later != first
    assert later.replace(b"15:05:05", b"15:04:05") == first


def test_write_svg(tmp_path):
    path = tmp_path / "terminal.svg"
    write_svg(str(path), STATS, "shv-ng", NOW)
    root = etree.fromstring(path.read_bytes())
    assert root.find(f".//{SVG}tspan[@id='total-commits']").text == "Total Commits: 420"


def test_write_svg_failure(tmp_path):
    with pytest.raises(WriteError):
        write_svg(str(tmp_path / "nope" / "terminal.svg"), STATS, "shv-ng", NOW)


def test_failed_replace_keeps_previous_card(tmp_path):
    path = tmp_path / "terminal.svg"
    path.write_bytes(b"previous card")
    with patch("os.replace", side_effect=OSError("disk full")):
        with pytest.raises(WriteError, match="failed to write"):
            write_svg(str(path), STATS, "shv-ng", NOW)
    assert path.read_bytes() == b"previous card"
    assert os.listdir(tmp_path) == ["terminal.svg"]


def test_overwrites_existing_card(tmp_path):
    path = tmp_path / "terminal.svg"
    path.write_bytes(b"previous card")
    write_svg(str(path), STATS, "shv-ng", NOW)
    assert path.read_bytes() == render_svg(STATS, "shv-ng", NOW)
    assert os.listdir(tmp_path) == ["terminal.svg"]


def test_unrenderable_text_is_write_error(tmp_path):
    stats = dataclasses.replace(STATS, most_used_languages="Go\x00")
    with pytest.raises(WriteError, match="failed to render"):
        write_svg(str(tmp_path / "terminal.svg"), stats, "shv-ng", NOW)
    assert not (tmp_path / "terminal.svg").exists()
