"""
Unit tests for the access gate and allow-list parsing.
"""
from app.services.access_gate import AccessGate, parse_allow_users


def test_open_mode_allows_everyone(open_gate):
    assert open_gate.open_mode
    assert open_gate.is_authorized("anyone", "anything")
    assert open_gate.is_authorized("", "")


def test_restricted_gate(restricted_gate):
    assert not restricted_gate.open_mode
    assert restricted_gate.is_authorized("alice", "secret")
    assert not restricted_gate.is_authorized("alice", "wrong")
    assert not restricted_gate.is_authorized("bob", "")


def test_empty_password_entry():
    """Test that a user configured without password matches an empty one."""
    gate = AccessGate(parse_allow_users("guest"))

    assert gate.is_authorized("guest", "")
    assert not gate.is_authorized("guest", "x")


def test_parse_allow_users():
    raw = " alice:secret , bob:hunter2,,guest, :nouser,carol:pa:ss "

    assert parse_allow_users(raw) == {
        "alice": "secret",
        "bob": "hunter2",
        "guest": "",
        "carol": "pa:ss",
    }


def test_parse_allow_users_empty():
    assert parse_allow_users("") == {}
    assert parse_allow_users(None) == {}
    assert parse_allow_users(" , ") == {}
