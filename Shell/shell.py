import sys

import config
from Shell.builtin import WorkingDirectory
from Shell.exceptions import ParseError, report
from Shell.executor import execute_complex_command, execute_simple_command
from Shell.history import add_to_history, init_readline, load_history, save_history
from Shell.parser import parse_line
from Shell.process import cleanup_children
from Shell.prompt import get_prompt
from Shell.status import Status


def read_line(stream, interactive):
    """Next input line; raises EOFError at end of input"""
    if interactive:
        return input(get_prompt())
    line = stream.readline()
    if not line:
        raise EOFError
    return line


def run_line(line, cwd):
    """
    Parse and execute one input line.
    Returns: Status
    """
    cmd = parse_line(line)
    if cmd is None:
        return Status.CONTINUE

    if config.DEBUG:
        print(cmd.describe(), file=sys.stderr)

    if cmd.is_simple:
        return execute_simple_command(cmd, cwd)
    return execute_complex_command(cmd)


def main_loop(stream=None, cwd=None):
    """Main shell loop"""
    if stream is None:
        stream = sys.stdin
    interactive = stream is sys.stdin and stream.isatty()
    cwd = cwd or WorkingDirectory()

    if interactive:
        init_readline()
        load_history()

    try:
        while True:
            try:
                line = read_line(stream, interactive).strip()
            except EOFError:
                if interactive:
                    print()
                break
            except KeyboardInterrupt:
                print()
                continue

            if not line:
                continue

            if interactive:
                add_to_history(line)

            try:
                status = run_line(line, cwd)
            except ParseError as e:
                report(e)
                continue

            if status is Status.EXIT:
                break

    finally:
        if interactive:
            save_history()
        cleanup_children()
