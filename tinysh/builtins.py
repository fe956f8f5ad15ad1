"""Commands the shell handles itself."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, TextIO

from .environment import Environment
from .textutil import is_number, parse_number

__all__ = [
    "ShellExit",
    "Session",
    "home_path",
    "builtin_env",
    "builtin_setenv",
    "builtin_unsetenv",
    "builtin_cd",
    "builtin_exit",
    "BUILTINS",
]

NO_SUCH_FILE = ": No such file or directory."
CD_TOO_MANY = "cd: Too many arguments."
SETENV_TOO_MANY = "setenv: Too many arguments."
UNSETENV_TOO_FEW = "unsetenv: Too few arguments."
EXIT_SYNTAX = "exit: Expression Syntax."


class ShellExit(Exception):
    """Raised when the shell is asked to stop, carrying the exit status."""

    def __init__(self, code: int = 0) -> None:
        super().__init__(code)
        self.code = code


@dataclass
class Session:
    """State shared by the built-in commands."""

    env: Environment
    environ: Dict[str, str] = field(default_factory=dict)
    out: TextIO = field(default_factory=lambda: sys.stdout)
    old: Optional[str] = None

    def _say(self, text: str, newline: bool = True) -> None:
        self.out.write(text + ("\n" if newline else ""))
        self.out.flush()


def _prefix_matches(text: str, prefix: str) -> bool:
    return prefix.startswith(text[: len(prefix)])


def home_path(pwd: Optional[str]) -> Optional[str]:
    """Return the relative path that ``cd`` with no target climbs from *pwd*.

    Returns None when *pwd* holds no ``/``.
    """
    if not pwd:
        return None
    slashes = pwd.count("/")
    if slashes < 1:
        return None
    return "../" * (1 + max(0, slashes - 3))


def _try_chdir(target: Optional[str]) -> bool:
    if target is None:
        return False
    try:
        os.chdir(target)
    except (OSError, ValueError):
        return False
    return True


def builtin_env(session: Session, args: Sequence[str]) -> None:
    """Print every variable."""
    session.env.show(session.out)


def builtin_setenv(session: Session, args: Sequence[str]) -> None:
    """Print the variables, or set one to a value (or to nothing)."""
    if len(args) < 2:
        session.env.show(session.out)
    elif len(args) > 3:
        session._say(SETENV_TOO_MANY)
    else:
        session.env.set(args[1], args[2] if len(args) == 3 else None)


def builtin_unsetenv(session: Session, args: Sequence[str]) -> None:
    """Remove every named variable."""
    if len(args) < 2:
        session._say(UNSETENV_TOO_FEW)
        return
    for key in args[1:]:
        session.env.unset(key)


def _cd_to_last(session: Session, cwd: str) -> None:
    if session.old is None:
        session._say(NO_SUCH_FILE)
    _try_chdir(session.old)
    session.old = cwd


def _cd_to_home(session: Session, args: Sequence[str], cwd: str) -> None:
    if len(args) > 2:
        session._say(CD_TOO_MANY)
    session.old = cwd
    _try_chdir(home_path(session.env.pwd()))


def _cd_simple(session: Session, args: Sequence[str], cwd: str) -> None:
    if len(args) > 2:
        session._say(CD_TOO_MANY)
    session.old = cwd
    if not _try_chdir(args[1]):
        session._say(args[1], newline=False)
        session._say(NO_SUCH_FILE)


def builtin_cd(session: Session, args: Sequence[str]) -> None:
    """Change directory: ``-`` goes back, ``~`` or nothing climbs home."""
    cwd = os.getcwd()
    target = args[1] if len(args) > 1 else None
    if target is not None and _prefix_matches(target, "-") and len(args) < 3:
        _cd_to_last(session, cwd)
    elif target is None or _prefix_matches(target, "~"):
        _cd_to_home(session, args, cwd)
    else:
        _cd_simple(session, args, cwd)


def builtin_exit(session: Session, args: Sequence[str]) -> None:
    """Stop the shell with an optional numeric status."""
    session._say("exit")
    if len(args) < 2:
        raise ShellExit(0)
    if len(args) == 2 and is_number(args[1]):
        raise ShellExit(parse_number(args[1]))
    session._say(EXIT_SYNTAX)


BUILTINS: Dict[str, Callable[[Session, List[str]], None]] = {
    "env": builtin_env,
    "setenv": builtin_setenv,
    "unsetenv": builtin_unsetenv,
    "cd": builtin_cd,
    "exit": builtin_exit,
}