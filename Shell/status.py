from enum import Enum


class Status(Enum):
    """What the main loop should do after a command."""
    CONTINUE = 0
    EXIT = 1
