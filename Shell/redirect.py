"""
Stream redirection for a process that is about to exec.

Every step replaces the previous binding for good, so this must only ever
run inside a forked child.
"""

import os

from config import REDIRECT_MODE
from Shell.exceptions import RedirectBindFailed, RedirectOpenFailed, describe_os_error

STDIN, STDOUT, STDERR = 0, 1, 2

READ_FLAGS = os.O_RDONLY
WRITE_FLAGS = os.O_CREAT | os.O_WRONLY | os.O_TRUNC


def bind_fd(fd, target):
    """dup2 fd onto target, then close fd."""
    if fd == target:
        # open() reused the slot of a closed standard stream
        return
    try:
        os.dup2(fd, target)
    except OSError as e:
        raise RedirectBindFailed("dup2", describe_os_error(e))
    close_fd(fd)


def redirect_file(path, flags, target):
    try:
        fd = os.open(path, flags, REDIRECT_MODE)
    except OSError as e:
        raise RedirectOpenFailed(path, describe_os_error(e))
    bind_fd(fd, target)


def setup_redirections(cmd):
    """Apply the infile/outfile/errfile of a SimpleCommand to fds 0, 1 and 2."""
    if cmd.infile is not None:
        redirect_file(cmd.infile, READ_FLAGS, STDIN)
    if cmd.outfile is not None:
        redirect_file(cmd.outfile, WRITE_FLAGS, STDOUT)
    if cmd.errfile is not None:
        redirect_file(cmd.errfile, WRITE_FLAGS, STDERR)


def close_fd(fd):
    try:
        os.close(fd)
    except OSError as e:
        raise RedirectBindFailed("close", describe_os_error(e))
