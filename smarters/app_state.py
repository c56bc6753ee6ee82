from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from smarters.models import ChannelEntry


@dataclass(frozen=True)
class SessionState:
    """One immutable snapshot of what the UI shows."""

    playlist_url: str = ""
    epg_url: str = ""
    entries: tuple[ChannelEntry, ...] = ()
    selected: ChannelEntry | None = None
    is_loading: bool = False
    error_message: str | None = None

    @property
    def has_error(self) -> bool:
        return self.error_message is not None

    def find(self, url: str) -> ChannelEntry | None:
        for e in self.entries:
            if e.url == url:
                return e
        return None


def reconcile_selection(prior: ChannelEntry | None, entries: Sequence[ChannelEntry]) -> ChannelEntry | None:
    """Carry a selection over to a freshly loaded list.

    The previous pick survives when its URL is still listed (metadata comes
    from the new entry); otherwise the first entry is selected.
    """
    if not entries:
        return None
    if prior is None:
        return entries[0]
    for e in entries:
        if e.url == prior.url:
            return e
    return entries[0]
