from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout.containers import (
    Float,
    FloatContainer,
    HSplit,
    VSplit,
    Window,
)
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.layout import Layout
from prompt_toolkit.layout.menus import CompletionsMenu
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame, TextArea

from lan_chat.constants import DEFAULT_THEME, READY_STATUS, THEMES
from lan_chat.models import Message, Peer, Severity
from lan_chat.services.change_detector import describe_peers
from lan_chat.ui import SlashCompleter

if TYPE_CHECKING:
    from lan_chat.repositories.preference_repository import PreferenceRepository

MAX_NOTICES = 20


def format_time(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).strftime("%H:%M")
    except ValueError:
        return timestamp


def get_style(theme: str) -> Style:
    theme_dict = THEMES.get(theme, THEMES[DEFAULT_THEME])
    base_dict = {
        "scrollbar.background": "bg:#cccccc",
        "scrollbar.button": "bg:#888888",
    }
    return Style.from_dict({**base_dict, **theme_dict})


class PromptToolkitView:
    """Terminal presenter: chat pane, peer sidebar, status bar, input line."""

    def __init__(
        self,
        preferences: "PreferenceRepository | None" = None,
        on_submit: Callable[[str], None] | None = None,
    ):
        self.preferences = preferences
        self.theme = preferences.load().theme if preferences else DEFAULT_THEME
        self.on_submit = on_submit
        self.application: Any = None

        self.message_lines: list[str] = []
        self.notices: list[str] = []
        self.peers: list[Peer] = []
        self.status_text = READY_STATUS
        self.status_severity = Severity.INFO

        self.output_field = TextArea(
            style="class:chat-area",
            focusable=False,
            wrap_lines=True,
        )
        self.input_field = TextArea(
            height=1,
            prompt="> ",
            style="class:input-area",
            multiline=False,
            wrap_lines=False,
            completer=SlashCompleter(),
            complete_while_typing=True,
        )
        self.sidebar_control = FormattedTextControl(self.get_sidebar_fragments)
        self.status_control = FormattedTextControl(self.get_status_fragments)

    # Presenter interface

    def render_messages(self, messages: Sequence[Message]) -> None:
        own_name = self.preferences.load().username if self.preferences else None
        lines = []
        for message in messages:
            author = "You" if message.author == own_name else message.author
            stamp = format_time(message.timestamp)
            lines.append(f"[{stamp}] {author}: {message.text}")
        self.message_lines = lines
        self.refresh_output()

    def render_peers(self, peers: Sequence[Peer]) -> None:
        self.peers = list(peers)
        self.invalidate()

    def report_status(self, text: str, severity: Severity) -> None:
        self.status_text = text
        self.status_severity = severity
        self.invalidate()

    def prompt_for_username(self) -> None:
        self.show_notice(
            "Welcome! Set a display name with /name <your name> to start chatting."
        )

    # Rendering helpers

    def show_notice(self, text: str) -> None:
        self.notices.append(f"[System] {text}")
        self.notices = self.notices[-MAX_NOTICES:]
        self.refresh_output()

    def show_peers(self) -> None:
        if not self.peers:
            self.show_notice(
                "No peers found. Make sure other instances are running on the network."
            )
            return
        for peer in self.peers:
            self.show_notice(f"{peer.id} ({peer.address or 'Unknown address'})")

    def refresh_output(self) -> None:
        text = "\n".join(self.message_lines + self.notices)
        self.output_field.text = text
        self.output_field.buffer.cursor_position = len(text)
        self.invalidate()

    def get_sidebar_fragments(self) -> list[tuple[str, str]]:
        count = len(self.peers)
        fragments = [("class:sidebar", describe_peers(count) + "\n")]
        for peer in self.peers:
            fragments.append(("class:sidebar", f" * {peer.id}\n"))
            fragments.append(("class:timestamp", f"   {peer.address}\n"))
        return fragments

    def get_status_fragments(self) -> list[tuple[str, str]]:
        style = "class:status"
        if self.status_severity is Severity.ERROR:
            style = "class:status.error"
        return [(style, f" {self.status_text}")]

    def apply_theme(self, theme: str) -> None:
        self.theme = theme
        if self.application is not None:
            self.application.style = get_style(theme)
        self.invalidate()

    # Application lifecycle

    def build_application(self) -> Any:
        key_bindings = KeyBindings()

        @key_bindings.add("enter")
        def _submit(_event: Any) -> None:
            if self.on_submit is not None:
                self.on_submit(self.input_field.text)

        @key_bindings.add("c-c")
        def _exit(event: Any) -> None:
            event.app.exit()

        root_container = HSplit(
            [
                VSplit(
                    [
                        Frame(self.output_field, title="Chat History"),
                        Frame(
                            Window(
                                content=self.sidebar_control,
                                width=30,
                                style="class:sidebar",
                            ),
                            title="Online",
                        ),
                    ]
                ),
                Frame(self.input_field, title="Your Message (/ for commands)"),
                Window(content=self.status_control, height=1, style="class:status"),
            ]
        )
        layout_container = FloatContainer(
            content=root_container,
            floats=[
                Float(
                    xcursor=True,
                    ycursor=True,
                    content=CompletionsMenu(max_height=8, scroll_offset=1),
                )
            ],
        )
        self.application = Application(
            layout=Layout(layout_container, focused_element=self.input_field),
            key_bindings=key_bindings,
            style=get_style(self.theme),
            full_screen=True,
            mouse_support=True,
        )
        return self.application

    def invalidate(self) -> None:
        if self.application is not None:
            self.application.invalidate()

    async def run_async(self) -> Any:
        if self.application is None:
            self.build_application()
        return await self.application.run_async()

    def exit(self, result: str | None = None) -> None:
        if self.application is not None:
            self.application.exit(result=result)
