"""
Exception hierarchy for treeshell.

Three kinds of failure exist:
 - recoverable: reported, the interpreter reads the next line
 - fatal to a child: reported by the child, which then exits with status 1
 - fatal to the interpreter: FatalError, propagated out of the main loop
"""

import os
import sys


class ShellError(Exception):
    """Base class for all shell errors."""

    def __init__(self, message, exit_code=1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self):
        return self.message


class ParseError(ShellError):
    """Input line could not be turned into a command tree."""


class InvalidArgument(ShellError):
    """Builtin called without the arguments it needs."""


class ChangeDirectoryFailed(ShellError):
    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path


# ---------- Fatal to the child ----------

class RedirectOpenFailed(ShellError):
    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path


class RedirectBindFailed(ShellError):
    def __init__(self, call, reason):
        super().__init__(f"{call}: {reason}")
        self.call = call


class ProgramNotFound(ShellError):
    def __init__(self, program, reason="No such file or directory"):
        super().__init__(f"{program}: {reason}", exit_code=127)
        self.program = program


class ExecFailed(ShellError):
    def __init__(self, program, reason):
        super().__init__(f"{program}: {reason}", exit_code=126)
        self.program = program


# ---------- Fatal to the interpreter ----------

class FatalError(ShellError):
    """No partial state to recover into, the interpreter must stop."""


class UnsupportedOperator(FatalError):
    def __init__(self, oper):
        super().__init__(f"unsupported operator: {oper}")
        self.oper = oper


def describe_os_error(err):
    """strerror text for an OSError, like perror() would print it."""
    if err.strerror:
        return err.strerror
    if err.errno:
        return os.strerror(err.errno)
    return str(err)


def report(err, subject=None):
    """Print a diagnostic for err on stderr."""
    if isinstance(err, OSError):
        text = describe_os_error(err)
        if subject is None:
            subject = err.filename
        line = f"{subject}: {text}" if subject else text
    elif subject:
        line = f"{subject}: {err}"
    else:
        line = str(err)
    print(line, file=sys.stderr, flush=True)
