import os


def ensure_dir(path):
    """
    Ensure directory exists.
    """
    os.makedirs(path, exist_ok=True)


def ensure_parent_dir(file_path):
    """
    Ensure the directory that will hold `file_path` exists.

    A bare file name (no directory part) needs nothing.
    """
    parent = os.path.dirname(os.path.abspath(file_path))
    ensure_dir(parent)
