"""Host-level error handling for the Monkey interpreter.

Monkey itself has two error channels that never raise: parser diagnostics (a list of strings) and evaluation errors
(Error objects). This module deals with everything around them: files that cannot be read, programs that fail when
run from a file, interrupts and runaway recursion. Only GenericExceptions should be encountered during running: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Reports look like:

```
  File '<in>', line 2:
    loop(0)
error: maximum recursion depth exceeded during evaluation
```
"""

import sys
from typing import NamedTuple, Optional

from termcolor import colored


class GenericException(Exception):
    """Host error or warning. msg is a str.format template; exprs are substituted into it, in bold when reported."""

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        elif isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = list(exprs)
        self.internal = internal

        super().__init__(msg.format(*self.exprs))

    @property
    def msg(self):
        """Message with every expr highlighted."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class EvaluationFailure(GenericException):
    """A program run from a file evaluated to a Monkey Error object."""

    def __init__(self, path, error):
        super().__init__("'{}' failed: {}", [path, error.message])
        self.error = error


class TracebackEntry(NamedTuple):
    """Source line being worked on in a file, if any."""
    line: Optional[str] = None
    line_num: Optional[int] = None


class ErrorHandler:
    """Context manager that reports GenericExceptions (and the few Python errors a Monkey program can provoke) instead
    of letting them escape.
    """
    ERROR = "red"
    WARNING = "magenta"

    RECURSION_MSG = "maximum recursion depth exceeded during evaluation"

    def __init__(self, fatal=True):
        self.fatal = fatal  # exit with status 1 after reporting an error
        self.traceback = {}

    def register_file(self, path):
        self.traceback[path] = TracebackEntry()

    def register_line(self, path, line, line_num):
        """Marks line as the one being worked on in path. Called by Session before it adds/runs a line."""
        self.traceback[path] = TracebackEntry(line, line_num)

    def remove_line(self, path):
        """Called by Session once a line was added/run without raising."""
        self.traceback[path] = TracebackEntry()

    def format_traceback(self):
        entries = [(path, entry) for path, entry in self.traceback.items() if entry.line is not None]
        lines = [f"  File '{path}', line {entry.line_num}:\n    {entry.line}\n" for path, entry in entries]
        if len(lines) > 1:
            lines.insert(0, "Traceback:\n")
        return "".join(lines)

    @staticmethod
    def label(text, color):
        return colored(text, color, attrs=["bold"])

    def warn(self, *args, **kwargs):
        """Prints a warning built from args (same signature as GenericException). Never exits."""
        warning = GenericException(*args, **kwargs)
        print(ErrorHandler.label("warning: ", ErrorHandler.WARNING) + warning.msg)

    def throw(self, error):
        """Reports error, a GenericException, below the registered traceback. Exits if fatal, otherwise clears the
        traceback lines so the next report starts fresh.
        """
        report = self.format_traceback()
        if error.internal:
            report += ErrorHandler.label("[internal] ", ErrorHandler.ERROR)
        report += ErrorHandler.label("error: ", ErrorHandler.ERROR) + error.msg
        print(report)

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: TracebackEntry() for path in self.traceback}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            return False
        elif issubclass(exc_type, SystemExit):
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException(ErrorHandler.RECURSION_MSG))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: '{}: {}'", [exc_type.__name__, str(exc_val)], internal=True))
            return False  # re-raised for debugging
        return True
