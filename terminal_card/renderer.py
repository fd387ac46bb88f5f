"""
Terminal-style SVG card.

Layout is fixed: a rounded background panel, a fake tty login, an ASCII-art
logo on the left and the profile block on the right. Only the text content
and the "Last login" timestamp change between runs.

SVG IDs filled from stats:
  login-username, last-login, profile-username, user-bio, followers,
  profile-following, total-repo, total-stars, total-commits,
  most-used-language
"""

from __future__ import annotations
import datetime
import logging
import os
import tempfile
from typing import Dict, Iterable, Optional, Tuple

from lxml import etree

from .errors import WriteError
from .models import AggregatedStats

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

KERNEL_BANNER = "Arch Linux 6.7.1-arch1-1 (tty1)"
TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %Y on tty1"
SEPARATOR = "-----------------------"
REBOOT_COMMAND = 'echo "Reboot in 5 sec..." ; sleep 5 ; reboot'

LINE = "1.3em"
GAP = "2.3em"
PROFILE_X = "400"
ART_X = "30"

ASCII_ART = (
    "⠀⠀⠀⠀⠀⠀⠀⢀⣠⣤⣤⣶⣶⣶⣶⣤⣤⣄⡀⠀⠀⠀⠀⠀⠀⠀",
    "⠀⠀⠀⠀⢀⣤⣾⣿⣿⠿⠟⠛⠛⠛⠛⠻⠿⣿⣿⣷⣤⡀⠀⠀⠀⠀",
    "⠀⠀⠀⣴⣿⣿⠟⠋⠁⠀⠀⠀⠀⠀⠀⠀⠀⠈⠙⠻⣿⣿⣦⠀⠀⠀",
    "⠀⢀⣾⣿⡿⠁⠀⠀⣴⣦⣄⠀⠀⠀⠀⠀⣀⣤⣶⡀⠈⢿⣿⣷⡀⠀",
    "⠀⣾⣿⡟⠁⠀⠀⠀⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⠃⠀⠈⢻⣿⣷⠀",
    "⢠⣿⣿⠁⠀⠀⠀⣠⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣦⠀⠀⠈⣿⣿⡄",
    "⢸⣿⣿⠀⠀⠀⢰⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⡇⠀⠀⣿⣿⡇",
    "⠘⣿⣿⡦⠤⠒⠒⢿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⡿⠧⠤⢴⣿⣿⠃",
    "⠀⢿⣿⣧⡀⠀⢤⡀⠙⠻⠿⣿⣿⣿⣿⣿⡿⠟⠋⠁⠀⢀⣼⣿⡿⠀",
    "⠀⠈⢿⣿⣷⡀⠈⢿⣦⣤⣾⣿⣿⣿⣿⣿⣷⣄⠀⠀⢀⣾⣿⡿⠁⠀",
    "⠀⠀⠀⠻⣿⣿⣦⣄⡉⣿⣿⢿⣿⠉⢻⣿⢿⣿⣠⣴⣿⣿⠟⠀⠀⠀",
    "⠀⠀⠀⠀⠈⠛⢿⣿⣿⣿⣧⣼⣿⣤⣾⣷⣶⣿⣿⡿⠛⠁⠀⠀⠀⠀",
    "⠀⠀⠀⠀⠀⠀⠀⠈⠙⠛⠛⠿⠿⠿⠿⠛⠛⠋⠁⠀⠀⠀⠀⠀⠀⠀",
)

STYLE = """
        * {
            font-family: 'JetBrains Mono', monospace;
        }

        .bg {
            fill: #11111b;
            filter: drop-shadow(5px 5px 10px rgba(0, 0, 0, 0.5));
        }

        #text-1 {
            fill: #f38ba8;
        }

        #text-2,
        #text-3 {
            fill: #f5c2e7;
        }

        .text {
            font-size: 17px;
            fill: #cdd6f4;
        }

        .text tspan {
            fill: #9399b2;
        }

        .command {
            fill: #a6e3a1 !important;
        }

        .str-command {
            fill: #fab387 !important;
        }

        .art {
            font-size: 15px;
            fill: #89b4fa;
        }

        .profile {
            font-size: 17px;
            fill: #89dceb;
        }

        #reboot-command, #reboot-status {
            display: none !important;
        }
            """

# (id, class, x, dy, value); None drops the attribute
Span = Tuple[Optional[str], Optional[str], Optional[str], Optional[str], str]


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def format_timestamp(now: datetime.datetime) -> str:
    return now.strftime(TIMESTAMP_FORMAT)


def add_text(parent: etree._Element, id_attr: str, cls: str, x: str, y: str,
             value: Optional[str] = None, spans: Iterable[Span] = ()) -> etree._Element:
    el = etree.SubElement(parent, _q("text"), **{"id": id_attr, "class": cls, "x": x, "y": y})
    el.text = value
    for span_id, span_cls, span_x, dy, span_value in spans:
        attrs: Dict[str, str] = {}
        for key, val in (("id", span_id), ("class", span_cls), ("x", span_x), ("dy", dy)):
            if val:
                attrs[key] = val
        etree.SubElement(el, _q("tspan"), **attrs).text = span_value
    return el


def profile_spans(stats: AggregatedStats, login: str) -> Tuple[Span, ...]:
    account = stats.account
    return (
        ("profile-username", None, PROFILE_X, LINE, login),
        ("profile-separator", None, PROFILE_X, LINE, SEPARATOR),
        ("user-bio", None, PROFILE_X, GAP, f"Bio: {stats.bio}"),
        ("followers", None, PROFILE_X, LINE, f"Followers: {account.followers}"),
        ("profile-following", None, PROFILE_X, LINE, f"Following: {account.following}"),
        ("total-repo", None, PROFILE_X, GAP, f"Total Repo: {account.public_repos}"),
        ("total-stars", None, PROFILE_X, LINE, f"Total Stars: {stats.stars}"),
        ("total-commits", None, PROFILE_X, LINE, f"Total Commits: {stats.total_commits}"),
        ("most-used-language", None, PROFILE_X, LINE, f"Most used language: {stats.most_used_languages}"),
    )


def build_svg(stats: AggregatedStats, login: str, now: datetime.datetime) -> etree._Element:
    """Build the card tree. Depends only on its arguments."""
    root = etree.Element(_q("svg"), nsmap={None: SVG_NS}, **{
        "width": "1040",
        "height": "660",
        "viewBox": "0 0 1020 650",
        "preserveAspectRatio": "xMidYMid",
    })
    etree.SubElement(root, _q("rect"), **{
        "id": "bg-rect", "class": "bg",
        "width": "1000", "height": "620",
        "rx": "20", "ry": "20", "x": "10", "y": "10",
    })

    prompt = f"[{login}@github ~]$ "
    add_text(root, "text-1", "text", "30", "40", KERNEL_BANNER)
    add_text(root, "text-2", "text", "30", "80", "github.com login: ",
             [("login-username", "login", None, None, login)])
    add_text(root, "text-3", "text", "30", "110", "password: ",
             [("password", "password", None, None, "******")])
    add_text(root, "text-4", "text", "30", "140", "Last login: ",
             [("last-login", "last-login", None, None, format_timestamp(now))])
    add_text(root, "text-5", "text", "30", "190", prompt,
             [("whoami", "command", None, None, "./whoami.sh")])
    add_text(root, "art", "art", ART_X, "220",
             spans=[(None, None, ART_X, LINE, line) for line in ASCII_ART])
    add_text(root, "profile-info", "profile", PROFILE_X, "220",
             spans=profile_spans(stats, login))
    add_text(root, "reboot-message", "text", "30", "550", prompt, [
        ("reboot-command", "reboot-command", None, None, REBOOT_COMMAND),
        ("reboot-status", None, "30", "2em", "Reboot in 5 sec..."),
    ])

    etree.SubElement(root, _q("style")).text = etree.CDATA(STYLE)
    return root


def render_svg(stats: AggregatedStats, login: str, now: datetime.datetime) -> bytes:
    tree = build_svg(stats, login, now)
    return etree.tostring(tree, encoding="utf-8", xml_declaration=True, pretty_print=True)


def write_svg(path: str, stats: AggregatedStats, login: str, now: datetime.datetime) -> None:
    """Render and atomically replace `path`; a failed run leaves any previous card in place."""
    try:
        data = render_svg(stats, login, now)
    except ValueError as e:
        # lxml rejects text that XML cannot carry
        raise WriteError(f"failed to render {path}: {e}") from e

    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile("wb", dir=directory, prefix=".terminal-", suffix=".svg", delete=False) as f:
            tmp_path = f.name
            f.write(data)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise WriteError(f"failed to write {path}: {e}") from e
    logger.info("Wrote %s (%d bytes)", path, len(data))
