"""
Execution of command trees.

execute_simple_command runs a lone SimpleCommand (builtins inline, programs
in a child). execute_complex_command walks a tree of operators, giving every
leaf its own process.
"""

import os

from Shell.builtin import WorkingDirectory, dispatch_builtin
from Shell.command import PIPE, Builtin
from Shell.exceptions import (
    ChangeDirectoryFailed, FatalError, InvalidArgument, UnsupportedOperator,
    describe_os_error, report,
)
from Shell.process import exec_program, ignore_interrupts, spawn, wait_for
from Shell.redirect import STDIN, STDOUT, bind_fd, close_fd, setup_redirections
from Shell.status import Status


def execute_nonbuiltin(cmd):
    """Redirect and exec cmd in the current process. Returns only by raising."""
    setup_redirections(cmd)
    exec_program(cmd.tokens)


def execute_simple_command(cmd, cwd=None):
    """
    Run a command that is not part of a pipe.
    Returns: Status.EXIT for exit, Status.CONTINUE otherwise
    """
    if cmd.builtin is not Builtin.NONE:
        try:
            status = dispatch_builtin(cmd.tokens, cwd or WorkingDirectory())
        except (InvalidArgument, ChangeDirectoryFailed) as e:
            report(e)
            return Status.CONTINUE
        if status is not None:
            return status

    try:
        pid = spawn(lambda: execute_nonbuiltin(cmd))
    except OSError as e:
        report(e, "fork")
        return Status.CONTINUE

    with ignore_interrupts():
        try:
            wait_for(pid)
        except OSError as e:
            report(e, "waitpid")
    return Status.CONTINUE


def execute_pipe(cmd):
    """cmd1 | cmd2: one child per side, joined by a pipe."""
    try:
        read_fd, write_fd = os.pipe()
    except OSError as e:
        raise FatalError(f"pipe: {describe_os_error(e)}")

    def producer():
        close_fd(read_fd)
        bind_fd(write_fd, STDOUT)
        execute_complex_command(cmd.cmd1)

    def consumer():
        close_fd(write_fd)
        bind_fd(read_fd, STDIN)
        execute_complex_command(cmd.cmd2)

    pids = []
    for stage in (producer, consumer):
        try:
            pids.append(spawn(stage))
        except OSError as e:
            os.close(read_fd)
            os.close(write_fd)
            raise FatalError(f"fork: {describe_os_error(e)}")

    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError as e:
            raise FatalError(f"close: {describe_os_error(e)}")

    with ignore_interrupts():
        for pid in pids:
            try:
                wait_for(pid)
            except OSError as e:
                raise FatalError(f"waitpid: {describe_os_error(e)}")

    return Status.CONTINUE


OPERATORS = {
    PIPE: execute_pipe,
}


def execute_complex_command(cmd):
    """
    Run a command tree.

    A SimpleCommand reached here is a pipe stage already running in its own
    child: it is exec'd directly and builtins are not intercepted, so `exit`
    or `cd` inside a pipe are looked up as ordinary programs.
    """
    if cmd.is_simple:
        execute_nonbuiltin(cmd)
        return Status.CONTINUE

    handler = OPERATORS.get(cmd.oper)
    if handler is None:
        raise UnsupportedOperator(cmd.oper)
    handler(cmd)
    return Status.CONTINUE
