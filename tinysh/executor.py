"""Starting external programs and reporting how they ended."""

from __future__ import annotations

import os
import subprocess
import sys
from typing import Mapping, Optional, Sequence, TextIO

from .textutil import split_words

__all__ = [
    "signal_message",
    "run_program",
    "find_in_path",
    "execute_from_path",
]

SEGFAULT_SIGNAL = 11
FLOATING_POINT_SIGNAL = 8
SEGFAULT_MESSAGE = "Segmentation fault (core dumped)"
FLOATING_POINT_MESSAGE = "Floating exception (core dumped)"
NOT_FOUND_SUFFIX = ": Command not found."


def signal_message(returncode: Optional[int]) -> Optional[str]:
    """Describe a crash from a child's return code, or return None.

    A negative return code means the child was killed by that signal.
    """
    if returncode is None or returncode >= 0:
        return None
    signum = -returncode
    if signum == SEGFAULT_SIGNAL:
        return SEGFAULT_MESSAGE
    if signum == FLOATING_POINT_SIGNAL:
        return FLOATING_POINT_MESSAGE
    return None


def _stream_fd(stream: TextIO) -> Optional[int]:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def run_program(
    path: str,
    argv: Sequence[str],
    environ: Optional[Mapping[str, str]],
    out: Optional[TextIO] = None,
) -> Optional[int]:
    """Run the program at *path* with *argv* and wait for it.

    The child writes straight to *out* when it is backed by a file
    descriptor; otherwise its output is collected and written to *out*.
    Returns the child's return code, or None when it could not be started.
    """
    stream = sys.stdout if out is None else out
    fd = _stream_fd(stream)
    stream.flush()
    try:
        completed = subprocess.run(
            list(argv),
            executable=path,
            env=None if environ is None else dict(environ),
            stdout=subprocess.PIPE if fd is None else fd,
            check=False,
        )
    except (OSError, ValueError):
        return None
    if fd is None and completed.stdout:
        stream.write(completed.stdout.decode(errors="replace"))
    message = signal_message(completed.returncode)
    if message:
        stream.write(message + "\n")
    stream.flush()
    return completed.returncode


def find_in_path(name: str, path_value: str) -> Optional[str]:
    """Return the first ``dir/name`` that exists among the dirs of *path_value*."""
    for directory in split_words(path_value, ":"):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.F_OK):
            return candidate
    return None


def execute_from_path(
    argv: Sequence[str],
    environ: Optional[Mapping[str, str]],
    path_value: str,
    out: Optional[TextIO] = None,
) -> Optional[int]:
    """Look ``argv[0]`` up in *path_value* and run it.

    When nothing is found a "Command not found." line goes to *out* and
    None is returned.
    """
    stream = sys.stdout if out is None else out
    found = find_in_path(argv[0], path_value)
    if found is None:
        stream.write(f"{argv[0]}{NOT_FOUND_SUFFIX}\n")
        stream.flush()
        return None
    return run_program(found, argv, environ, stream)