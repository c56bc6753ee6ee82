from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable

from smarters.app_state import SessionState, reconcile_selection
from smarters.errors import describe_error
from smarters.models import ChannelEntry
from smarters.services.iptv import PlaylistFetcher
from smarters.services.m3u import parse_m3u
from smarters.utils.threading import run_in_thread

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]
Runner = Callable[[Callable[[], None]], object]
Dispatch = Callable[[Callable[[], None]], None]


def _call_now(fn: Callable[[], None]) -> None:
    fn()


class PlaylistSession:
    """Owns the playlist state and the fetch/parse lifecycle.

    Every intent replaces the whole ``SessionState`` under a lock, then hands
    the new snapshot to listeners through ``dispatch`` (directly by default,
    on the Kivy main thread in the app). Loading runs on ``runner`` so reads
    never wait on the network.

    Only the most recent ``request_load()`` may publish its result; older
    completions are dropped.
    """

    def __init__(
        self,
        fetcher: PlaylistFetcher | None = None,
        runner: Runner = run_in_thread,
        dispatch: Dispatch | None = None,
    ):
        self.fetcher = fetcher or PlaylistFetcher()
        self._runner = runner
        self._dispatch = dispatch or _call_now
        self._lock = threading.RLock()
        self._state = SessionState()
        self._listeners: list[Listener] = []
        self._generation = 0

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)
            snapshot = self._state
            self._dispatch(lambda: self._deliver(listener, snapshot))

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def set_playlist_url(self, text: str) -> None:
        self._update(lambda s: replace(s, playlist_url=text))

    def set_epg_url(self, text: str) -> None:
        self._update(lambda s: replace(s, epg_url=text))

    def select_channel(self, entry: ChannelEntry) -> bool:
        with self._lock:
            listed = self._state.find(entry.url)
            if listed is None:
                logger.debug("Ignoring selection of unlisted channel %s", entry.url)
                return False
            self._update(lambda s: replace(s, selected=listed))
            return True

    def acknowledge_error(self) -> None:
        self._update(lambda s: replace(s, error_message=None))

    def request_load(self) -> bool:
        with self._lock:
            url = self._state.playlist_url.strip()
            if not url:
                logger.debug("Load requested with an empty playlist URL")
                return False
            self._generation += 1
            token = self._generation
            self._update(lambda s: replace(s, is_loading=True, error_message=None))

        logger.info("Loading playlist %s", url)
        self._runner(lambda: self._load(url, token))
        return True

    def _load(self, url: str, token: int) -> None:
        try:
            entries = parse_m3u(self.fetcher.fetch(url))
        except Exception as e:  # noqa: BLE001
            logger.warning("Playlist load failed for %s: %s", url, e)
            message = describe_error(e)
            self._finish(
                token,
                lambda s: replace(s, entries=(), selected=None, is_loading=False, error_message=message),
            )
            return

        logger.info("Loaded %d channels from %s", len(entries), url)
        self._finish(
            token,
            lambda s: replace(
                s,
                entries=entries,
                selected=reconcile_selection(s.selected, entries),
                is_loading=False,
            ),
        )

    def _finish(self, token: int, change: Callable[[SessionState], SessionState]) -> None:
        with self._lock:
            if token != self._generation:
                logger.info("Discarding result of superseded load #%d", token)
                return
            self._update(change)

    def _update(self, change: Callable[[SessionState], SessionState]) -> SessionState:
        with self._lock:
            old = self._state
            new = change(old)
            if new == old:
                return old
            self._state = new
            listeners = list(self._listeners)
            for listener in listeners:
                self._dispatch(lambda listener=listener: self._deliver(listener, new))
            return new

    @staticmethod
    def _deliver(listener: Listener, snapshot: SessionState) -> None:
        try:
            listener(snapshot)
        except Exception:  # noqa: BLE001
            logger.exception("State listener %r failed", listener)
