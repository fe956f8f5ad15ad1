import io
import os
from pathlib import Path

import pytest

from tinysh.builtins import (
    Session,
    ShellExit,
    builtin_cd,
    builtin_env,
    builtin_exit,
    builtin_setenv,
    builtin_unsetenv,
    home_path,
)
from tinysh.environment import Environment


def make_session(*entries):
    return Session(env=Environment(list(entries)), out=io.StringIO())


def cwd():
    return Path(os.getcwd()).resolve()


def test_home_path_values():
    assert home_path("/home/user") == "../"
    assert home_path("/a/b/c/d") == "../../"


def test_home_path_without_slash():
    assert home_path("nodir") is None
    assert home_path(None) is None


def test_env_prints_all():
    session = make_session("A=1", "B=2")
    builtin_env(session, ["env"])
    assert session.out.getvalue() == session.env.format()


def test_setenv_sets_value():
    session = make_session("A=1")
    builtin_setenv(session, ["setenv", "B", "2"])
    assert session.env.get("B") == "2"
    assert session.env.position("B") == 1


def test_setenv_replaces_value():
    session = make_session("A=1", "B=2")
    builtin_setenv(session, ["setenv", "A", "9"])
    assert session.env.get("A") == "9"
    assert session.env.position("A") == 0


def test_setenv_without_value():
    session = make_session()
    builtin_setenv(session, ["setenv", "C"])
    assert "C" in session.env
    assert session.env.get("C") is None


def test_setenv_without_args_prints():
    session = make_session("A=1")
    builtin_setenv(session, ["setenv"])
    assert session.out.getvalue() == session.env.format()


def test_setenv_too_many():
    session = make_session("A=1")
    builtin_setenv(session, ["setenv", "X", "1", "2"])
    assert session.out.getvalue() == "setenv: Too many arguments.\n"
    assert "X" not in session.env


def test_unsetenv_removes_several():
    session = make_session("A=1", "B=2", "C=3")
    builtin_unsetenv(session, ["unsetenv", "A", "C", "missing"])
    assert [key for key, _ in session.env] == ["B"]


def test_unsetenv_too_few():
    session = make_session("A=1")
    builtin_unsetenv(session, ["unsetenv"])
    assert session.out.getvalue() == "unsetenv: Too few arguments.\n"
    assert len(session.env) == 1


def test_exit_without_status():
    session = make_session()
    with pytest.raises(ShellExit) as excinfo:
        builtin_exit(session, ["exit"])
    assert excinfo.value.code == 0
    assert session.out.getvalue() == "exit\n"


def test_exit_with_status():
    session = make_session()
    with pytest.raises(ShellExit) as excinfo:
        builtin_exit(session, ["exit", "42"])
    assert excinfo.value.code == 42


@pytest.mark.parametrize("args", [["exit", "abc"], ["exit", "1", "2"], ["exit", "-1"]])
def test_exit_bad_syntax(args):
    session = make_session()
    builtin_exit(session, args)
    assert session.out.getvalue() == "exit\nexit: Expression Syntax.\n"


def test_cd_into_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "sub").mkdir()
    before = os.getcwd()
    session = make_session()
    builtin_cd(session, ["cd", "sub"])
    assert cwd() == (tmp_path / "sub").resolve()
    assert session.old == before
    assert session.out.getvalue() == ""


def test_cd_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session = make_session()
    builtin_cd(session, ["cd", "missing"])
    assert session.out.getvalue() == "missing: No such file or directory.\n"
    assert cwd() == tmp_path.resolve()


def test_cd_too_many_still_moves(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "sub").mkdir()
    session = make_session()
    builtin_cd(session, ["cd", "sub", "extra"])
    assert session.out.getvalue() == "cd: Too many arguments.\n"
    assert cwd() == (tmp_path / "sub").resolve()


def test_cd_dash_goes_back(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "sub").mkdir()
    session = make_session()
    builtin_cd(session, ["cd", "sub"])
    inside = os.getcwd()
    builtin_cd(session, ["cd", "-"])
    assert cwd() == tmp_path.resolve()
    assert session.old == inside


def test_cd_dash_without_previous(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    session = make_session()
    builtin_cd(session, ["cd", "-"])
    assert session.out.getvalue() == ": No such file or directory.\n"
    assert cwd() == tmp_path.resolve()
    assert session.old == os.getcwd()


@pytest.mark.parametrize("args", [["cd"], ["cd", "~"]])
def test_cd_home_climbs_from_pwd(tmp_path, monkeypatch, args):
    deep = tmp_path / "a" / "b"
    deep.mkdir(parents=True)
    monkeypatch.chdir(deep)
    session = make_session("PWD=/x/y")
    builtin_cd(session, args)
    assert cwd() == (tmp_path / "a").resolve()
    assert session.out.getvalue() == ""