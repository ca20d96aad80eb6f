import sys

from Shell.exceptions import FatalError, report
from Shell.shell import main_loop


def main():
    try:
        main_loop()
    except FatalError as e:
        report(e, "treeshell")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
