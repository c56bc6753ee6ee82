from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelEntry:
    name: str
    url: str
    group: str | None = None
    logo: str | None = None
