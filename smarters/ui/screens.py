from __future__ import annotations

from kivy.app import App
from kivy.lang import Builder
from kivy.properties import BooleanProperty, StringProperty
from kivy.uix.screenmanager import Screen

from kivymd.uix.list import TwoLineListItem

from smarters.app_state import SessionState
from smarters.models import ChannelEntry


KV = """
<PlayerScreen>:
    name: "player"
    MDBoxLayout:
        orientation: "vertical"
        padding: "12dp"
        spacing: "8dp"

        MDTextField:
            id: playlist_url
            hint_text: "Playlist URL"
            on_text: root.on_playlist_url(self.text)

        MDTextField:
            id: epg_url
            hint_text: "EPG URL (optional)"
            on_text: root.on_epg_url(self.text)

        MDBoxLayout:
            adaptive_height: True
            spacing: "8dp"
            MDRaisedButton:
                text: "Load"
                disabled: root.loading
                on_release: root.on_load()
            MDSpinner:
                size_hint: None, None
                size: "24dp", "24dp"
                active: root.loading

        MDLabel:
            text: root.now_playing
            adaptive_height: True

        ScrollView:
            MDList:
                id: channel_list
"""

Builder.load_string(KV)


class ChannelItem(TwoLineListItem):
    def __init__(self, entry: ChannelEntry, selected: bool, **kwargs):
        marker = "▶ " if selected else ""
        super().__init__(
            text=f"{marker}{entry.name}",
            secondary_text=entry.group or "",
            **kwargs,
        )
        self.entry = entry


class PlayerScreen(Screen):
    loading = BooleanProperty(False)
    now_playing = StringProperty("")

    _entries: tuple[ChannelEntry, ...] = ()
    _selected: ChannelEntry | None = None

    def on_playlist_url(self, text: str) -> None:
        App.get_running_app().session.set_playlist_url(text)

    def on_epg_url(self, text: str) -> None:
        App.get_running_app().session.set_epg_url(text)

    def on_load(self) -> None:
        App.get_running_app().session.request_load()

    def on_pick(self, item: ChannelItem) -> None:
        App.get_running_app().session.select_channel(item.entry)

    def render(self, state: SessionState) -> None:
        self.loading = state.is_loading
        sel = state.selected
        self.now_playing = f"Now playing: {sel.name}" if sel else ""

        if state.entries is self._entries and sel == self._selected:
            return
        self._entries = state.entries
        self._selected = sel

        container = self.ids.channel_list
        container.clear_widgets()
        for e in state.entries:
            item = ChannelItem(entry=e, selected=e == sel)
            item.bind(on_release=self.on_pick)
            container.add_widget(item)
