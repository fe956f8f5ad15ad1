# tinysh

A small interactive command shell. It reads one line at a time and runs
programs found on `PATH` or named with a leading `./`. It joins commands
with `|` and runs commands separated by `;` one after another. It keeps
its own ordered copy of the environment.

## Installing

```
pip install .
```

## Running

```
tinysh
```

`python -m tinysh.shell` starts the same shell.

The prompt is `~~~~> `. Before a line is run, leading blanks are dropped
and runs of spaces, tabs and newlines are collapsed. At end of input
(Ctrl-D) the shell prints `exit` and stops with status 0. It ignores
Ctrl-C and Ctrl-Z.

Before each command, `PWD` is set to the current directory.

## Builtins

| Command | What it does |
| --- | --- |
| `env` | Prints every variable as `KEY=value`, in insertion order. |
| `setenv` | With no arguments, prints the variables like `env`. |
| `setenv KEY [VALUE]` | Sets a variable; a new one is added at the end. Without `VALUE` the variable is empty. With more arguments it prints `setenv: Too many arguments.` |
| `unsetenv KEY...` | Removes each named variable. With no names it prints `unsetenv: Too few arguments.` |
| `cd DIR` | Changes directory. If that fails it prints `DIR: No such file or directory.` |
| `cd -` | Goes back to the directory that was current before the last `cd`. If there is none yet it prints `: No such file or directory.` |
| `cd` / `cd ~` | Climbs up relative to `PWD`. It goes one level up when `PWD` holds three `/` or fewer, otherwise `n - 2` levels for `n` slashes. From `/home/user/a/b`, for example, it lands in `/home/user`. |
| `exit [N]` | Prints `exit` and stops the shell with status `N` modulo 256 (default 0). A non-numeric or extra argument prints `exit: Expression Syntax.` and the shell keeps running. |

`cd` prints `cd: Too many arguments.` when given extra arguments. It still changes directory.

Any other command is looked up in the directories listed in `PATH`. An
unknown command prints `name: Command not found.`

When a program is killed by a segmentation fault, the shell prints
`Segmentation fault (core dumped)`. For a floating-point exception it
prints `Floating exception (core dumped)`.

## Pipes and sequences

- `a ; b ; c` runs each command in turn. A segment containing `|` is run
  as a pipeline.
- `a | b | c` runs the stages one after another. The whole output of a
  stage is collected and given to the next stage as its input. Builtins
  inside a pipeline cannot change the shell's variables or directory, and
  `exit` there does not stop the shell.

## Using it from Python

```python
from tinysh.shell import Shell

shell = Shell({"PATH": "/bin:/usr/bin", "HOME": "/tmp"})
shell.parse("setenv GREETING hello ; env")
```

`Shell(environ, stdin, stdout)` takes the starting variables and the
streams to read from and write to. It defaults to the process
environment and the standard streams. `Shell.loop()` prompts and runs
lines until `tinysh.builtins.ShellExit` is raised. The exit status is in
its `code` attribute.

The environment type works on its own:

```python
from tinysh.environment import Environment

env = Environment(["PATH=/bin", "HOME=/home/user"])
env.set("EDITOR", "vi")
env.unset("HOME")
print(env.position("EDITOR"))  # 1
print(env.format(), end="")    # PATH=/bin\nEDITOR=vi\n
```

`tinysh.textutil.split_words(text, delims)` splits a line into words at
any of the delimiter characters, the same way the shell does.
`tinysh.executor.find_in_path(name, path_value)` returns the first
`dir/name` that exists in a `PATH`-style string.

## What it does not do

- The shell does not interpret `>`, `<`, `>>` or `<<`. They reach the
  command as ordinary words.
- It has no quoting or escaping, no variable expansion, no globbing, no
  job control and no `&&` / `||`.
- Pipeline stages do not run at the same time. Each one finishes before
  the next one starts.

## Tests

```
pip install .[test]
pytest
```