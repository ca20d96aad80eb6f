"""
Tests for spawn, exec and child reaping.
"""

import os
import signal

import pytest
from conftest import exit_code, wait_until

from Shell.exceptions import InvalidArgument
from Shell.process import (
    cleanup_children, exec_program, ignore_interrupts, restore_signals, spawn, unreaped_children,
    wait_for,
)


class TestSpawn:

    def test_child_exits_zero(self, assert_no_zombies):
        pid = spawn(lambda: None)
        assert pid > 0
        assert exit_code(wait_for(pid)) == 0

    def test_os_error_exits_one(self, capfd):
        def fail():
            raise FileNotFoundError(2, "No such file or directory", "gone.txt")

        assert exit_code(wait_for(spawn(fail))) == 1
        _, err = capfd.readouterr()
        assert "gone.txt: No such file or directory" in err

    def test_shell_error_is_reported(self, capfd):
        def fail():
            raise InvalidArgument("bad argument")

        assert exit_code(wait_for(spawn(fail))) == 1
        _, err = capfd.readouterr()
        assert "bad argument" in err

    def test_child_never_returns_to_caller(self, workdir):
        marker = workdir / "marker"

        def setup():
            pass

        pid = spawn(setup)
        # only the parent gets here
        with open(marker, "a") as f:
            f.write(f"{os.getpid()}\n")
        wait_for(pid)
        assert marker.read_text() == f"{os.getpid()}\n"


class TestExec:

    def test_runs_program(self, capfd):
        pid = spawn(lambda: exec_program(["echo", "from", "exec"]))
        assert exit_code(wait_for(pid)) == 0
        out, _ = capfd.readouterr()
        assert out == "from exec\n"

    def test_program_not_found(self, capfd):
        pid = spawn(lambda: exec_program(["no-such-program-treeshell"]))
        assert exit_code(wait_for(pid)) == 127
        _, err = capfd.readouterr()
        assert "no-such-program-treeshell: No such file or directory" in err

    def test_not_executable(self, workdir, capfd):
        script = workdir / "script.sh"
        script.write_text("#!/bin/sh\necho hi\n")
        pid = spawn(lambda: exec_program([str(script)]))
        assert exit_code(wait_for(pid)) == 126
        _, err = capfd.readouterr()
        assert "Permission denied" in err


class TestReaping:

    def test_unwaited_child_is_a_zombie(self):
        pid = spawn(lambda: None)
        try:
            assert wait_until(lambda: pid in [p.pid for p in unreaped_children()])
        finally:
            wait_for(pid)
        assert pid not in [p.pid for p in unreaped_children()]

    def test_cleanup_children(self):
        pid = spawn(lambda: exec_program(["sleep", "30"]))
        cleanup_children()
        with pytest.raises(ChildProcessError):
            os.waitpid(pid, 0)

    def test_cleanup_without_children(self):
        cleanup_children()


def test_ignore_interrupts_restores_handler():
    before = signal.getsignal(signal.SIGINT)
    with ignore_interrupts():
        assert signal.getsignal(signal.SIGINT) is signal.SIG_IGN
    assert signal.getsignal(signal.SIGINT) is before


def test_programs_get_default_sigpipe():
    def setup():
        restore_signals()
        if signal.getsignal(signal.SIGPIPE) is not signal.SIG_DFL:
            raise OSError("SIGPIPE still ignored")

    # the interpreter itself runs with SIGPIPE ignored
    assert signal.getsignal(signal.SIGPIPE) is signal.SIG_IGN
    assert exit_code(wait_for(spawn(setup))) == 0
