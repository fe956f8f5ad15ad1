import io

import pytest

from tinysh.environment import Environment, get_data, get_key


@pytest.mark.parametrize(
    "entry, key, data",
    [
        ("HOME=/home/user", "HOME", "/home/user"),
        ("A=b=c", "A", "b=c"),
        ("EMPTY=", "EMPTY", ""),
        ("NOEQ", "NOEQ", ""),
    ],
)
def test_get_key_and_data(entry, key, data):
    assert get_key(entry) == key
    assert get_data(entry) == data


def test_entries_keep_order():
    env = Environment(["A=1", "B=2", "C=3"])
    assert list(env) == [("A", "1"), ("B", "2"), ("C", "3")]
    assert len(env) == 3


def test_set_existing_keeps_position():
    env = Environment(["A=1", "B=2"])
    env.set("A", "9")
    assert list(env) == [("A", "9"), ("B", "2")]


def test_set_new_appends():
    env = Environment(["A=1"])
    env.set("Z", "26")
    assert list(env) == [("A", "1"), ("Z", "26")]
    assert env.position("Z") == 1


def test_unset_removes_and_reports():
    env = Environment(["A=1", "B=2"])
    assert env.unset("A") is True
    assert list(env) == [("B", "2")]
    assert env.unset("A") is False
    assert len(env) == 1


def test_position():
    env = Environment(["A=1", "B=2"])
    assert env.position("A") == 0
    assert env.position("B") == 1
    assert env.position("C") is None


def test_get_with_default():
    env = Environment(["A=1"])
    assert env.get("A") == "1"
    assert env.get("B") is None
    assert env.get("B", "fallback") == "fallback"


def test_path_and_pwd_present():
    env = Environment(["PATH=/bin:/usr/bin", "PWD=/tmp"])
    assert env.path() == "/bin:/usr/bin"
    assert env.pwd() == "/tmp"


def test_path_and_pwd_missing():
    env = Environment([])
    assert env.path() == "Didn't find it"
    assert env.pwd() == "Didn't find it\n"


def test_format_with_missing_value():
    env = Environment(["A=1"])
    env.set("B")
    assert env.format() == "A=1\nB=\n"


def test_show_writes_format():
    env = Environment(["USER=someone", "SHELL=/bin/sh"])
    out = io.StringIO()
    env.show(out)
    assert out.getvalue() == env.format()
    assert out.getvalue().splitlines() == ["USER=someone", "SHELL=/bin/sh"]


def test_round_trip_through_format():
    entries = ["A=1", "B=x=y", "C="]
    env = Environment(entries)
    assert Environment(env.format().splitlines()).format() == env.format()
    assert env.format().splitlines() == entries


def test_contains():
    env = Environment(["A=1"])
    assert "A" in env
    assert "B" not in env