"""Ordered environment variables as the shell keeps them."""

from __future__ import annotations

import sys
from typing import Iterable, Iterator, Optional, TextIO

__all__ = ["get_key", "get_data", "Environment"]

PATH_NOT_FOUND = "Didn't find it"
PWD_NOT_FOUND = "Didn't find it\n"


def get_key(entry: str) -> str:
    """Return the part of a ``KEY=VALUE`` entry before the first ``=``."""
    return entry.partition("=")[0]


def get_data(entry: str) -> str:
    """Return the part of a ``KEY=VALUE`` entry after the first ``=``."""
    return entry.partition("=")[2]


class Environment:
    """Variables in insertion order; a value may be None when unset."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._vars: dict[str, Optional[str]] = {}
        for entry in entries:
            self._vars[get_key(entry)] = get_data(entry)

    def set(self, key: str, data: Optional[str] = None) -> None:
        """Replace the value of *key*, or append it when it is new."""
        self._vars[key] = data

    def unset(self, key: str) -> bool:
        """Remove *key*; return whether it was present."""
        if key in self._vars:
            del self._vars[key]
            return True
        return False

    def position(self, key: str) -> Optional[int]:
        """Return the index of *key*, or None when it is absent."""
        for index, name in enumerate(self._vars):
            if name == key:
                return index
        return None

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of *key*, or *default* when it is absent."""
        return self._vars.get(key, default)

    def path(self) -> Optional[str]:
        """Return the value of PATH, with a placeholder when it is absent."""
        return self._vars.get("PATH", PATH_NOT_FOUND)

    def pwd(self) -> Optional[str]:
        """Return the value of PWD, with a placeholder when it is absent."""
        return self._vars.get("PWD", PWD_NOT_FOUND)

    def format(self) -> str:
        """Render every variable as a ``KEY=VALUE`` line."""
        return "".join(
            f"{key}={'' if data is None else data}\n" for key, data in self._vars.items()
        )

    def show(self, out: Optional[TextIO] = None) -> None:
        """Write the rendered variables to *out* (standard output by default)."""
        stream = sys.stdout if out is None else out
        stream.write(self.format())
        stream.flush()

    def __iter__(self) -> Iterator[tuple[str, Optional[str]]]:
        return iter(list(self._vars.items()))

    def __len__(self) -> int:
        return len(self._vars)

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __repr__(self) -> str:
        return f"Environment({self.format().splitlines()!r})"