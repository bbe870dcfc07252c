from prompt_toolkit.completion import Completer, Completion

from lan_chat.constants import THEMES

COMMANDS = [
    ("/name", "Set your display name (e.g. /name Alice)"),
    ("/theme", "Switch between light and dark"),
    ("/clear", "Clear all messages on the server (/clear confirm)"),
    ("/peers", "Show peers currently online"),
    ("/quit", "Quit the application"),
]


class SlashCompleter(Completer):
    def _yield_candidates(
        self, prefix: str, options: list[str], metas: dict[str, str] | None = None
    ):
        metas = metas or {}
        for value in options:
            if value.startswith(prefix):
                yield Completion(
                    value,
                    start_position=-len(prefix),
                    display=value,
                    display_meta=metas.get(value, ""),
                )

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        tokens = text.split()
        trailing_space = text.endswith(" ")
        if len(tokens) == 1 and not trailing_space:
            word = text.lower()
            for cmd, desc in COMMANDS:
                if cmd.startswith(word):
                    yield Completion(
                        cmd, start_position=-len(word), display=cmd, display_meta=desc
                    )
            return

        current = "" if trailing_space else tokens[-1]
        if len(tokens) > 2 or (len(tokens) == 2 and trailing_space):
            return
        command = tokens[0].lower()
        if command == "/theme":
            yield from self._yield_candidates(current, sorted(THEMES.keys()))
        elif command == "/clear":
            yield from self._yield_candidates(
                current, ["confirm"], {"confirm": "This cannot be undone"}
            )
