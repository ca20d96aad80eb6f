import os

from Shell.command import Builtin, classify
from Shell.exceptions import ChangeDirectoryFailed, InvalidArgument, describe_os_error
from Shell.status import Status


class WorkingDirectory:
    """
    The interpreter's current directory.
    Owned by the main loop and handed to the builtins that change it.
    """

    def get(self):
        return os.getcwd()

    def change(self, path):
        os.chdir(path)


def resolve_cd_target(cwd, path):
    """Absolute paths are used as given, relative ones are joined onto cwd."""
    if os.path.isabs(path):
        return path
    return cwd.get() + "/" + path


def builtin_cd(tokens, cwd):
    """
    Change the interpreter's directory to tokens[1].
    Raises: InvalidArgument, ChangeDirectoryFailed
    """
    if len(tokens) < 2 or tokens[0] != "cd":
        raise InvalidArgument("Path expected after cd")

    path = tokens[1]
    try:
        cwd.change(resolve_cd_target(cwd, path))
    except OSError as e:
        raise ChangeDirectoryFailed(path, describe_os_error(e))


def builtin_exit(tokens, cwd):
    return Status.EXIT


BUILTINS = {
    Builtin.CD: builtin_cd,
    Builtin.EXIT: builtin_exit,
}


def dispatch_builtin(tokens, cwd):
    """
    Run tokens as a builtin if it is one.
    Returns: None when tokens is not a builtin, otherwise a Status
    """
    handler = BUILTINS.get(classify(tokens))
    if handler is None:
        return None
    return handler(tokens, cwd) or Status.CONTINUE
