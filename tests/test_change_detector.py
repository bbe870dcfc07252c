from engine_util import FakePresenter, make_messages, make_peers

from lan_chat.models import Severity, SyncSettings
from lan_chat.services import ChangeDetector, StatusService
from lan_chat.services.change_detector import describe_messages, describe_peers


def build_detector() -> tuple[ChangeDetector, FakePresenter]:
    presenter = FakePresenter()
    status_service = StatusService(presenter, SyncSettings())
    return ChangeDetector(presenter, status_service), presenter


def test_same_count_with_different_content_does_not_render():
    detector, presenter = build_detector()
    assert detector.apply_messages(make_messages(3, prefix="old")) is True

    assert detector.apply_messages(make_messages(3, prefix="new")) is False

    assert len(presenter.message_renders) == 1
    assert presenter.message_renders[0][0].text == "old 0"
    assert presenter.statuses == [("3 messages loaded", Severity.INFO)]


def test_count_change_in_either_direction_renders():
    detector, presenter = build_detector()
    detector.apply_messages(make_messages(3))

    assert detector.apply_messages(make_messages(4)) is True
    assert detector.apply_messages(make_messages(2)) is True

    assert [len(batch) for batch in presenter.message_renders] == [3, 4, 2]
    assert detector.snapshot.last_message_count == 2


def test_empty_collection_on_fresh_snapshot_is_silent():
    detector, presenter = build_detector()

    assert detector.apply_messages([]) is False
    assert detector.apply_peers([]) is False
    assert presenter.message_renders == []
    assert presenter.statuses == []


def test_emptied_collection_reports_no_messages():
    detector, presenter = build_detector()
    detector.apply_messages(make_messages(2))

    detector.apply_messages([])

    assert presenter.message_renders[-1] == []
    assert presenter.statuses[-1] == ("No messages yet", Severity.INFO)


def test_peer_counts_are_tracked_separately():
    detector, presenter = build_detector()
    detector.apply_messages(make_messages(2))

    assert detector.apply_peers(make_peers(2)) is True
    assert detector.apply_peers(make_peers(2)) is False
    assert detector.apply_peers(make_peers(1)) is True

    assert detector.snapshot.last_message_count == 2
    assert detector.snapshot.last_peer_count == 1
    assert presenter.statuses[-1] == ("1 peer online", Severity.INFO)


def test_status_text():
    assert describe_messages(0) == "No messages yet"
    assert describe_messages(5) == "5 messages loaded"
    assert describe_peers(0) == "0 peers online"
    assert describe_peers(1) == "1 peer online"
    assert describe_peers(3) == "3 peers online"
