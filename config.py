import os

HISTORY_FILE = os.path.expanduser(os.getenv("TREESHELL_HISTORY", "~/.treeshell_history"))
MAX_HISTORY = int(os.getenv("TREESHELL_MAX_HISTORY", "1000"))

# rw-rw-r-- for files created by > and 2>
REDIRECT_MODE = 0o664

DEBUG = os.getenv("TREESHELL_DEBUG", "") not in ("", "0")
