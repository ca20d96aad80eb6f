"""
Process creation, program invocation and reaping.

spawn() forks and runs a setup callable in the child; the child never
returns to the caller's code, it always leaves through os._exit().
"""

import os
import signal
import sys
from contextlib import contextmanager

import psutil

import config
from Shell.exceptions import ExecFailed, ProgramNotFound, ShellError, describe_os_error, report


def flush_std_streams():
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


def run_child(setup):
    """Body of a forked child. Does not return."""
    status = 1
    try:
        setup()
        status = 0
    except ShellError as e:
        report(e)
        status = e.exit_code
    except OSError as e:
        report(e)
    except Exception as e:
        print(f"treeshell: {e}", file=sys.stderr)
    finally:
        flush_std_streams()
        os._exit(status)


def spawn(setup):
    """
    Fork a child that runs setup().
    Returns: pid of the child (in the parent only)
    Raises: OSError if fork fails
    """
    flush_std_streams()
    pid = os.fork()
    if pid == 0:
        run_child(setup)
    if config.DEBUG:
        print(f"[{pid}] spawned", file=sys.stderr)
    return pid


def restore_signals():
    """
    Undo the dispositions the Python runtime sets at startup.
    An ignored signal stays ignored across exec, and a producer that ignores
    SIGPIPE keeps running after its consumer is gone.
    """
    for name in ("SIGPIPE", "SIGXFZ", "SIGXFSZ"):
        signum = getattr(signal, name, None)
        if signum is not None:
            signal.signal(signum, signal.SIG_DFL)


def exec_program(tokens):
    """Replace the current process image with tokens[0]. Never returns."""
    flush_std_streams()
    restore_signals()
    try:
        os.execvp(tokens[0], tokens)
    except FileNotFoundError:
        raise ProgramNotFound(tokens[0])
    except OSError as e:
        raise ExecFailed(tokens[0], describe_os_error(e))


@contextmanager
def ignore_interrupts():
    """Ctrl+C goes to the foreground children, the interpreter keeps waiting."""
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def wait_for(pid):
    """
    Block until child pid terminates.
    Returns: raw wait status
    """
    _, status = os.waitpid(pid, 0)
    if config.DEBUG:
        print(f"[{pid}] reaped, status {status}", file=sys.stderr)
    return status


def child_processes():
    """Direct children of the interpreter, zombies included."""
    try:
        return psutil.Process().children()
    except psutil.Error:
        return []


def unreaped_children():
    """Children that have terminated but were never waited on."""
    zombies = []
    for proc in child_processes():
        try:
            if proc.status() == psutil.STATUS_ZOMBIE:
                zombies.append(proc)
        except psutil.NoSuchProcess:
            continue
    return zombies


def cleanup_children(timeout=1.0):
    """Terminate and reap whatever children the interpreter still owns."""
    children = child_processes()
    if not children:
        return

    for proc in children:
        try:
            proc.terminate()
            print(f"Terminated leftover process [{proc.pid}]", file=sys.stderr)
        except psutil.NoSuchProcess:
            pass

    _, alive = psutil.wait_procs(children, timeout=timeout)
    for proc in alive:
        try:
            proc.kill()
        except psutil.NoSuchProcess:
            pass
    psutil.wait_procs(alive, timeout=timeout)
