from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from lan_chat.errors import ValidationError

if TYPE_CHECKING:
    from lan_chat.services.sync_engine import SyncEngine
    from lan_chat.view import PromptToolkitView


class ChatController:
    """Turns input-line text into engine intents.

    Clearing the input line and confirming destructive commands are
    presentation concerns, so they live here rather than in the engine.
    """

    def __init__(self, engine: "SyncEngine", view: "PromptToolkitView"):
        self.engine = engine
        self.view = view
        self.command_handlers: dict[str, Callable[[str], None]] = {}

    def build_command_handlers(self) -> dict[str, Callable[[str], None]]:
        self.command_handlers = {
            "/name": self.handle_name_command,
            "/theme": self.handle_theme_command,
            "/clear": self.handle_clear_command,
            "/peers": self.handle_peers_command,
            "/quit": self.handle_quit_command,
            "/exit": self.handle_quit_command,
        }
        return self.command_handlers

    def handle_input(self, text: str) -> None:
        text = text.strip()
        if not text:
            return

        if text.startswith("/"):
            if not self.command_handlers:
                self.build_command_handlers()
            parts = text.split(" ", 1)
            command = parts[0].lower()
            args = parts[1] if len(parts) > 1 else ""
            handler = self.command_handlers.get(command)
            if handler is None:
                self.view.show_notice(f"Unknown command: {command}")
            else:
                handler(args)
            self.view.input_field.text = ""
            return

        if self.engine.submit(text) is not None:
            self.view.input_field.text = ""

    def handle_name_command(self, args: str) -> None:
        try:
            self.engine.set_username(args)
        except ValidationError:
            return

    def handle_theme_command(self, args: str) -> None:
        target = args.strip().lower()
        if not target:
            current = self.engine.local_preferences.theme
            self.view.show_notice(f"Current theme: {current}. Available: light, dark")
            return
        try:
            saved = self.engine.set_theme(target)
        except ValidationError:
            return
        if saved:
            self.view.apply_theme(target)

    def handle_clear_command(self, args: str) -> None:
        if args.strip().lower() != "confirm":
            self.view.show_notice(
                "This clears all messages for everyone and cannot be undone. "
                "Type /clear confirm to proceed."
            )
            return
        self.engine.request_clear()

    def handle_peers_command(self, _args: str) -> None:
        self.view.show_peers()

    def handle_quit_command(self, _args: str) -> None:
        self.view.exit()

    def bind(self) -> None:
        self.view.on_submit = self.handle_input
