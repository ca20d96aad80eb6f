import os


def get_prompt():
    """Current directory followed by '> '"""
    try:
        cwd = os.getcwd()
    except OSError:
        # the directory was removed from under us
        cwd = "?"
    return f"{cwd}> "
