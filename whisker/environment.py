"""
Process-facing collaborators of a parse.

The parser core never touches sys.argv, the output streams or sys.exit directly;
it goes through an Environment, which makes every effect injectable:

- argv:    zero-argument callable returning the raw argument vector
           (default: sys.argv[1:], read at call time), or a ready sequence.
- stdout:  rich Console used for help/version output on the success path.
- stderr:  rich Console used for help output on the error path.
- exit:    callable taking the exit code (default: sys.exit). The parser never
           resumes after calling it when it really exits.
- retitle: optional callable taking the process title; no title is set when absent.

Text is written to the stream of the selected Console, so help screens arrive
verbatim: no markup, no highlighting, no wrapping and no tab expansion.
"""
import sys
from collections.abc import Callable, Iterable

from rich.console import Console

from .utils import *


class Environment:
    __slots__ = ("_argv", "_stdout", "_stderr", "_exit", "_retitle")

    def __init__(self, *, argv=Unset, stdout=Unset, stderr=Unset, exit=Unset, retitle=Unset):
        if argv is Unset:
            argv = lambda: sys.argv[1:]  # NOQA: E-731
        elif isinstance(argv, str) or not isinstance(argv, Callable | Iterable):
            raise TypeError("environment 'argv' must be a callable or an iterable of strings")
        elif not callable(argv):
            argv = (lambda tokens: lambda: list(tokens))(tuple(argv))

        for name, console in (("stdout", stdout), ("stderr", stderr)):
            if not isinstance(console, Console | Unset):
                raise TypeError(f"environment {name!r} must be a rich Console")
        for name, function in (("exit", exit), ("retitle", retitle)):
            if function is not Unset and not callable(function):
                raise TypeError(f"environment {name!r} must be callable")

        self._argv = argv
        self._stdout = stdout
        self._stderr = stderr
        self._exit = coalesce(exit, sys.exit)
        self._retitle = retitle

    @property
    def stdout(self):
        # Consoles are created lazily so a parse that prints nothing opens nothing.
        if self._stdout is Unset:
            self._stdout = Console()
        return self._stdout

    @property
    def stderr(self):
        if self._stderr is Unset:
            self._stderr = Console(stderr=True)
        return self._stderr

    def arguments(self):
        arguments = list(self._argv())
        if not all(isinstance(argument, str) for argument in arguments):
            raise TypeError("argv must be an iterable of strings")
        return arguments

    def write(self, text, /, *, error=False):
        # verbatim: tabs and square brackets reach the stream untouched
        file = (self.stderr if error else self.stdout).file
        file.write(text + "\n")
        file.flush()

    def terminate(self, code=0, /):
        self._exit(code)

    def retitle(self, title, /):
        if self._retitle is not Unset and title:
            self._retitle(title)


__all__ = (
    "Environment",
)
