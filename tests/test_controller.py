import asyncio
from pathlib import Path

from dependency_injector import providers  # type: ignore[import-not-found]
from engine_util import FakeRemoteClient, make_peers

import chat
from lan_chat.constants import PREF_USERNAME
from lan_chat.models import Severity


def build_app(tmp_path: Path, username: str | None = "Alice"):
    config_file = tmp_path / "lan_chat_config.json"
    config_file.write_text('{"time_unit_seconds": 10}', encoding="utf-8")
    container = chat.build_container(
        str(config_file), preferences_file=str(tmp_path / "preferences.json")
    )
    client = FakeRemoteClient()
    container.remote_client.override(providers.Object(client))
    if username is not None:
        container.preference_repository().set(PREF_USERNAME, username)
    controller = container.controller()
    controller.bind()
    return container, controller, client


def test_container_wires_one_engine_around_the_view(tmp_path):
    container, controller, client = build_app(tmp_path)
    engine = container.sync_engine()

    assert controller.engine is engine
    assert engine.presenter is container.view()
    assert engine.client is client
    assert engine.scheduler.settings.time_unit_seconds == 10
    assert container.view().on_submit == controller.handle_input


def test_plain_text_is_submitted_and_input_cleared(tmp_path):
    container, controller, client = build_app(tmp_path)
    view = container.view()

    async def scenario():
        view.input_field.text = "hello there"
        controller.handle_input(view.input_field.text)
        await container.sync_engine().scheduler.wait_idle()

    asyncio.run(scenario())

    assert client.submitted == [("Alice", "hello there")]
    assert view.input_field.text == ""
    assert view.status_text == "Message sent"


def test_rejected_text_keeps_input(tmp_path):
    container, controller, client = build_app(tmp_path, username=None)
    view = container.view()

    async def scenario():
        view.input_field.text = "hello"
        controller.handle_input("hello")

    asyncio.run(scenario())

    assert client.submitted == []
    assert view.input_field.text == "hello"
    assert view.status_severity is Severity.ERROR
    assert any("/name" in notice for notice in view.notices)


def test_name_command_saves_username(tmp_path):
    container, controller, _client = build_app(tmp_path, username=None)

    controller.handle_input("/name Carol")

    assert container.preference_repository().load().username == "Carol"
    assert container.view().status_text == "Username saved"


def test_name_command_with_blank_name_reports_error(tmp_path):
    container, controller, _client = build_app(tmp_path, username=None)

    controller.handle_input("/name")

    assert container.preference_repository().load().username is None
    assert container.view().status_severity is Severity.ERROR


def test_theme_command_switches_theme(tmp_path):
    container, controller, _client = build_app(tmp_path)

    controller.handle_input("/theme dark")

    assert container.preference_repository().load().theme == "dark"
    assert container.view().theme == "dark"


def test_theme_command_rejects_unknown_theme(tmp_path):
    container, controller, _client = build_app(tmp_path)

    controller.handle_input("/theme neon")

    assert container.view().theme == "light"
    assert container.view().status_text == "Unknown theme 'neon'."


def test_clear_requires_confirmation(tmp_path):
    container, controller, client = build_app(tmp_path)

    async def scenario():
        controller.handle_input("/clear")
        await container.sync_engine().scheduler.wait_idle()
        assert client.clear_calls == 0
        controller.handle_input("/clear confirm")
        await container.sync_engine().scheduler.wait_idle()

    asyncio.run(scenario())

    assert client.clear_calls == 1
    assert container.view().status_text == "Messages cleared"


def test_peers_command_lists_rendered_peers(tmp_path):
    container, controller, _client = build_app(tmp_path)
    view = container.view()
    view.render_peers(make_peers(2))

    controller.handle_input("/peers")

    assert view.notices[-1] == "[System] peer-1 (192.168.1.11)"


def test_unknown_command_shows_notice(tmp_path):
    container, controller, _client = build_app(tmp_path)

    controller.handle_input("/bogus")

    assert container.view().notices[-1] == "[System] Unknown command: /bogus"
