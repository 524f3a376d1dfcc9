"""In-memory host tests."""

import pytest

from bigfile.constants import DOCUMENT_POST_READ, DOCUMENT_PRE_READ


def test_open_document_fires_pre_then_post_read(host):
    """Opening a document fires both load events in order."""
    seen = []
    host.subscribe(DOCUMENT_POST_READ, lambda e: seen.append(e.name))
    host.subscribe(DOCUMENT_PRE_READ, lambda e: seen.append(e.name))

    host.open_document("a.txt", size=1)

    assert seen == [DOCUMENT_PRE_READ, DOCUMENT_POST_READ]


def test_glob_patterns_match_path_or_name(host):
    """Globs match either the full path or the file name."""
    seen = []
    host.subscribe(DOCUMENT_PRE_READ, lambda e: seen.append(e.path), patterns=("*.log",))

    host.open_document("/var/log/app.log", size=1)
    host.open_document("/var/log/app.txt", size=1)

    assert seen == ["/var/log/app.log"]


def test_once_subscription_removed_after_firing(host):
    """A once subscription fires a single time."""
    seen = []
    document_id = host.add_document("a.txt", size=1)
    subscription = host.subscribe(
        DOCUMENT_POST_READ, lambda e: seen.append(e.document_id), document_id=document_id, once=True
    )

    host.emit(DOCUMENT_POST_READ, document_id)
    host.emit(DOCUMENT_POST_READ, document_id)

    assert seen == [document_id]
    assert not subscription.active
    assert host.subscriptions == []


def test_subscription_added_during_event_waits_for_next(host):
    """Subscriptions registered while an event is delivered miss that event."""
    seen = []
    document_id = host.add_document("a.txt", size=1)

    def register(event):
        host.subscribe(DOCUMENT_PRE_READ, lambda e: seen.append("late"))

    host.subscribe(DOCUMENT_PRE_READ, register, once=True)
    host.emit(DOCUMENT_PRE_READ, document_id)

    assert seen == []
    host.emit(DOCUMENT_PRE_READ, document_id)
    assert seen == ["late"]


def test_clear_group(host):
    """clear_group cancels only that group's subscriptions."""
    host.subscribe(DOCUMENT_PRE_READ, lambda e: None, group="bigfile")
    kept = host.subscribe(DOCUMENT_PRE_READ, lambda e: None, group="other")

    host.clear_group("bigfile")

    assert host.subscriptions == [kept]


def test_close_document_drops_scoped_subscriptions(host):
    """Closing a document releases subscriptions scoped to it."""
    document_id = host.add_document("a.txt", size=1)
    host.subscribe(DOCUMENT_POST_READ, lambda e: None, document_id=document_id, once=True)
    kept = host.subscribe(DOCUMENT_POST_READ, lambda e: None)

    host.close_document(document_id)

    assert host.subscriptions == [kept]
    assert document_id not in host.documents


def test_callback_errors_are_recorded(host):
    """Exceptions from callbacks are logged and delivery continues."""
    seen = []
    document_id = host.add_document("a.txt", size=1)

    def broken(event):
        raise RuntimeError("handler failed")

    host.subscribe(DOCUMENT_PRE_READ, broken, description="broken handler")
    host.subscribe(DOCUMENT_PRE_READ, lambda e: seen.append(e.document_id))

    host.emit(DOCUMENT_PRE_READ, document_id)

    assert seen == [document_id]
    assert len(host.errors) == 1
    assert host.errors[0].description == "broken handler"
    assert str(host.errors[0].error) == "handler failed"


def test_side_table(host):
    """Variables are stored per document."""
    first = host.add_document("a.txt", size=1)
    second = host.add_document("b.txt", size=1)

    host.set_var(first, "flag", 1)

    assert host.get_var(first, "flag") == 1
    with pytest.raises(KeyError):
        host.get_var(second, "flag")


def test_event_payload(host):
    """Keyword arguments to emit become event data."""
    document_id = host.add_document("a.txt", size=1)

    event = host.emit("custom", document_id, client_id=2)

    assert event.data == {"client_id": 2}
    assert event.path == "a.txt"


def test_emit_for_unknown_document(host):
    """Events need a known document."""
    with pytest.raises(LookupError):
        host.emit(DOCUMENT_PRE_READ, 404)
