"""Tests for the session layer."""

from structlog.testing import capture_logs

from treasure.session import SessionStore


def test_get_or_create_reuses_sessions():
    store = SessionStore()
    first = store.get_or_create("abc")
    assert store.get_or_create("abc") is first
    assert store.get_or_create("def") is not first
    assert len(store) == 2


def test_starting_life_is_passed_on():
    store = SessionStore(starting_life=300)
    assert store.get_or_create("abc").state.life == 300


def test_process_command():
    session = SessionStore().get_or_create("abc")
    assert session.process_command("help").startswith("Available commands")
    assert session.state.turns == 1


def test_views():
    session = SessionStore().get_or_create("abc")
    assert len(session.get_map()) == 9
    assert session.get_room_description().startswith("In a ")
    assert isinstance(session.get_exits(), list)
    assert session.get_inventory() == []


def test_reset():
    session = SessionStore(starting_life=300).get_or_create("abc")
    session.process_command("quit")
    assert session.state.is_finished

    session.reset()
    assert not session.state.is_finished
    assert session.state.life == 300
    assert session.state.turns == 0


def test_least_recently_played_session_is_dropped():
    store = SessionStore(max_sessions=2)
    store.get_or_create("abc")
    store.get_or_create("def")
    store.get_or_create("abc")

    store.get_or_create("ghi")

    assert len(store) == 2
    assert "abc" in store
    assert "def" not in store
    assert "ghi" in store


def test_fingerprint_comes_from_log_context_only():
    session = SessionStore().get_or_create("abc")
    with capture_logs() as logs:
        session.process_command("help")
        session.reset()

    events = {entry["event"]: entry for entry in logs}
    assert "fingerprint" not in events["command_processed"]
    assert "fingerprint" not in events["game_reset"]
