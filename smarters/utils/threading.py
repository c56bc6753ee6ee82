from __future__ import annotations

import logging
import threading
from typing import Callable

from kivy.clock import Clock

logger = logging.getLogger(__name__)


def run_in_thread(fn: Callable[[], None]) -> threading.Thread:
    def _runner():
        try:
            fn()
        except Exception:  # noqa: BLE001
            logger.exception("Background task failed")

    t = threading.Thread(target=_runner, daemon=True)
    t.start()
    return t


def on_main_thread(fn: Callable[[], None]) -> None:
    Clock.schedule_once(lambda *_: fn(), 0)
