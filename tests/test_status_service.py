import asyncio

from engine_util import FakePresenter

from lan_chat.constants import READY_STATUS
from lan_chat.models import Severity, SyncSettings
from lan_chat.services import StatusService


def build_service(
    time_unit_seconds: float = 0.01,
) -> tuple[StatusService, FakePresenter]:
    presenter = FakePresenter()
    settings = SyncSettings(time_unit_seconds=time_unit_seconds)
    return StatusService(presenter, settings), presenter


def test_info_status_reverts_to_ready():
    service, presenter = build_service()

    async def scenario():
        service.report("Message sent")
        await asyncio.sleep(0.06)

    asyncio.run(scenario())

    assert presenter.statuses == [
        ("Message sent", Severity.INFO),
        (READY_STATUS, Severity.INFO),
    ]
    assert service.current.text == READY_STATUS


def test_error_status_is_sticky():
    service, presenter = build_service()

    async def scenario():
        service.error("Failed to send message")
        await asyncio.sleep(0.06)

    asyncio.run(scenario())

    assert presenter.statuses == [("Failed to send message", Severity.ERROR)]


def test_newer_status_is_not_cleared_by_older_timer():
    service, presenter = build_service()

    async def scenario():
        service.report("first")
        await asyncio.sleep(0.02)
        service.error("broken")
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert presenter.statuses == [
        ("first", Severity.INFO),
        ("broken", Severity.ERROR),
    ]


def test_revert_with_outdated_token_is_ignored():
    service, presenter = build_service()
    old = service.report("first")
    service.report("second")

    service._revert_if_current(old.token)

    assert presenter.status_texts == ["first", "second"]
    assert service.current.text == "second"


def test_tokens_increase_monotonically():
    service, _presenter = build_service()

    tokens = [service.report(text).token for text in ("a", "b", "c")]

    assert tokens == sorted(tokens)
    assert len(set(tokens)) == 3
