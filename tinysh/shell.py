"""The interactive command loop."""

from __future__ import annotations

import io
import os
import signal
import subprocess
import sys
from contextlib import contextmanager
from typing import Iterator, List, Mapping, Optional, Sequence, TextIO

from .builtins import BUILTINS, Session, ShellExit
from .environment import Environment
from .executor import execute_from_path, find_in_path, run_program, signal_message
from .textutil import count_chars, split_words, squeeze, strip_last

__all__ = ["Shell", "main", "PROMPT"]

PROMPT = "~~~~> "


def _looks_local(name: str) -> bool:
    return "./".startswith(name[:2])


class Shell:
    """Reads command lines and runs them."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ) -> None:
        self.environ = dict(os.environ if environ is None else environ)
        self.stdin = sys.stdin if stdin is None else stdin
        env = Environment(f"{key}={value}" for key, value in self.environ.items())
        self.session = Session(
            env=env,
            environ=self.environ,
            out=sys.stdout if stdout is None else stdout,
        )

    @property
    def stdout(self) -> TextIO:
        return self.session.out

    def _write(self, text: str) -> None:
        self.session.out.write(text)
        self.session.out.flush()

    def _run_fed(
        self, path: str, args: List[str], data: bytes, out: TextIO
    ) -> Optional[int]:
        """Run a program with ``data`` on its standard input."""
        try:
            completed = subprocess.run(
                args,
                executable=path,
                input=data,
                stdout=subprocess.PIPE,
                env=self.environ,
            )
        except OSError:
            return None
        out.write(completed.stdout.decode(errors="replace"))
        message = signal_message(completed.returncode)
        if message:
            out.write(message + "\n")
        out.flush()
        return completed.returncode

    def _dispatch(self, line: str, input_data: Optional[bytes]) -> None:
        args = split_words(line, " ")
        self.session.env.set("PWD", os.getcwd())
        name = args[0]
        if not name:
            return
        out = self.session.out
        path_value = self.session.env.path() or ""
        if _looks_local(name):
            if input_data is None:
                run_program(name, args, self.environ, out)
            else:
                self._run_fed(name, args, input_data, out)
        elif name in BUILTINS:
            BUILTINS[name](self.session, args)
        elif input_data is None:
            execute_from_path(args, self.environ, path_value, out)
        else:
            found = find_in_path(name, path_value)
            if found is None:
                out.write(f"{name}: Command not found.\n")
                out.flush()
            else:
                self._run_fed(found, args, input_data, out)

    def analyse(self, line: str) -> None:
        """Run one simple command: a local program, a built-in or a PATH lookup."""
        self._dispatch(line, None)

    @contextmanager
    def _isolated(self, sink: TextIO) -> Iterator[None]:
        """Run a pipeline stage without letting it change the shell's state."""
        cwd = os.getcwd()
        snapshot = list(self.session.env)
        old = self.session.old
        saved_out = self.session.out
        self.session.out = sink
        try:
            yield
        except ShellExit:
            pass
        finally:
            self.session.out = saved_out
            restored = Environment()
            for key, data in snapshot:
                restored.set(key, data)
            self.session.env = restored
            self.session.old = old
            try:
                os.chdir(cwd)
            except OSError:
                pass

    def run_pipeline(self, line: str) -> None:
        """Run the ``|``-separated stages, each fed the previous one's output."""
        stages = split_words(line, "|")
        data: Optional[bytes] = None
        final = self.session.out
        for index, stage in enumerate(stages):
            last = index == len(stages) - 1
            sink = final if last else io.StringIO()
            with self._isolated(sink):
                self._dispatch(stage, data)
            if not last:
                data = sink.getvalue().encode()

    def run_sequence(self, line: str) -> None:
        """Run the ``;``-separated commands one after another."""
        for segment in split_words(line, ";"):
            if count_chars(segment, "|") > 0:
                self.run_pipeline(segment)
            else:
                self.analyse(segment)

    def parse(self, line: str) -> None:
        """Run a whole command line."""
        if count_chars(line, ";") > 0:
            self.run_sequence(line)
        elif count_chars(line, "|") > 0:
            self.run_pipeline(line)
        else:
            # Redirection characters are not interpreted; they reach the
            # command as ordinary words.
            self.analyse(line)

    def read_command(self) -> str:
        """Read and tidy one line; at end of input print ``exit`` and stop."""
        line = self.stdin.readline()
        if line == "":
            self._write("exit\n")
            raise ShellExit(0)
        return strip_last(squeeze(line, " \t\n"), "\n")

    def loop(self) -> None:
        """Prompt, read and run commands until the shell is told to stop."""
        while True:
            self._write(PROMPT)
            self.parse(self.read_command())


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start an interactive shell on the process's standard streams."""
    if hasattr(signal, "SIGTSTP"):
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    shell = Shell()
    try:
        shell.loop()
    except ShellExit as stop:
        return stop.code % 256
    return 0


if __name__ == "__main__":
    sys.exit(main())