from __future__ import annotations

import re

from smarters.models import ChannelEntry


_EXTINF = "#EXTINF"

# Playlists break lines on CR/LF only; other Unicode separators stay in the text.
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# Values stop at the next double quote, so matching stays linear.
_GROUP_RE = re.compile(r"(?<![\w-])group-title=\"([^\"]*)\"")
_LOGO_RE = re.compile(r"(?<![\w-])tvg-logo=\"([^\"]*)\"")


def parse_m3u(text: str) -> tuple[ChannelEntry, ...]:
    """Parse playlist text into channel entries, in source order.

    Best effort: malformed metadata degrades to missing fields and never
    raises. Only the last ``#EXTINF`` line before a locator applies to it.
    """
    entries: list[ChannelEntry] = []

    pending_name: str | None = None
    pending_group: str | None = None
    pending_logo: str | None = None

    for raw in _LINE_BREAK_RE.split(text):
        ln = raw.strip().lstrip("\ufeff").strip()
        if not ln:
            continue

        if ln.startswith(_EXTINF):
            pending_name = _display_name(ln) or None
            pending_group = _attr(_GROUP_RE, ln)
            pending_logo = _attr(_LOGO_RE, ln)
            continue

        if ln.startswith("#"):
            continue

        entries.append(
            ChannelEntry(
                name=pending_name or ln,
                url=ln,
                group=pending_group,
                logo=pending_logo,
            )
        )
        pending_name = None
        pending_group = None
        pending_logo = None

    return tuple(entries)


def _display_name(line: str) -> str:
    _, colon, args = line.partition(":")
    if not colon:
        return ""

    # first comma outside a quoted attribute value
    quoted = False
    for i, ch in enumerate(args):
        if ch == '"':
            quoted = not quoted
        elif ch == "," and not quoted:
            return args[i + 1 :].strip()

    # unbalanced quotes hide every comma; fall back to a plain split
    if quoted and "," in args:
        return args.split(",", 1)[1].strip()
    return args.strip()


def _attr(pattern: re.Pattern[str], line: str) -> str | None:
    m = pattern.search(line)
    return m.group(1) if m else None
