"""
Shared fixtures for treeshell tests.

Commands run as real processes, so most tests work inside a temporary
directory and inspect the files the children leave behind.
"""

import os
import time

import pytest

from Shell.builtin import WorkingDirectory
from Shell.process import unreaped_children


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Temporary directory made current for the duration of the test."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cwd():
    return WorkingDirectory()


def exit_code(status):
    """Exit code from a raw waitpid status."""
    assert os.WIFEXITED(status)
    return os.WEXITSTATUS(status)


def wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


@pytest.fixture
def assert_no_zombies():
    """Fails the test if it leaves terminated children behind."""
    yield
    assert unreaped_children() == []
