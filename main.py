from __future__ import annotations

import faulthandler
import sys
import traceback
from datetime import datetime
from pathlib import Path


def _crash_dir() -> Path:
    return Path.home() / ".smarters" / "crash_logs"


def _write_crash_log(text: str) -> str | None:
    try:
        base = _crash_dir()
        base.mkdir(parents=True, exist_ok=True)
        p = base / f"smarters_crash_{datetime.now().strftime('%Y%m%d_%H%M%S')}.txt"
        p.write_text(text, encoding="utf-8")
        return str(p)
    except OSError:
        return None


def _setup_faulthandler() -> None:
    try:
        base = _crash_dir()
        base.mkdir(parents=True, exist_ok=True)
        f = open(base / "smarters_faulthandler.txt", "a", encoding="utf-8")
        f.write(f"\n=== START {datetime.now().isoformat()} ===\n")
        f.flush()
        faulthandler.enable(file=f, all_threads=True)
    except OSError:
        pass


def _excepthook(exc_type, exc, tb):
    _write_crash_log("".join(traceback.format_exception(exc_type, exc, tb)))
    sys.__excepthook__(exc_type, exc, tb)


sys.excepthook = _excepthook
_setup_faulthandler()

from kivy.clock import Clock
from kivy.uix.screenmanager import ScreenManager

from kivymd.app import MDApp
from kivymd.uix.button import MDFlatButton
from kivymd.uix.dialog import MDDialog

from smarters.app_state import SessionState
from smarters.config import FetchConfig
from smarters.services.iptv import PlaylistFetcher
from smarters.session import PlaylistSession
from smarters.ui.screens import PlayerScreen
from smarters.utils.threading import on_main_thread


class SmartersApp(MDApp):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.fetcher = PlaylistFetcher(FetchConfig())
        self.session = PlaylistSession(fetcher=self.fetcher, dispatch=on_main_thread)
        self._dialog: MDDialog | None = None
        self._unsubscribe = None

    def build(self):
        self.theme_cls.primary_palette = "Blue"
        self.theme_cls.theme_style = "Dark"

        root = ScreenManager()
        root.add_widget(PlayerScreen())
        Clock.schedule_once(lambda *_: self._wire(), 0)
        return root

    def _wire(self) -> None:
        self._unsubscribe = self.session.subscribe(self._on_state)

    def _on_state(self, state: SessionState) -> None:
        self.root.get_screen("player").render(state)
        if state.error_message and self._dialog is None:
            self.show_error("Playlist error", state.error_message)

    def show_error(self, title: str, text: str) -> None:
        self._dialog = MDDialog(
            title=title,
            text=text,
            buttons=[MDFlatButton(text="OK", on_release=lambda *_: self._dialog.dismiss())],
        )
        self._dialog.bind(on_dismiss=self._on_error_dismissed)
        self._dialog.open()

    def _on_error_dismissed(self, *_) -> None:
        self._dialog = None
        self.session.acknowledge_error()

    def on_stop(self):
        if self._unsubscribe:
            self._unsubscribe()
        self.fetcher.close()


if __name__ == "__main__":
    try:
        SmartersApp().run()
    except Exception:  # noqa: BLE001
        _write_crash_log(traceback.format_exc())
        raise
