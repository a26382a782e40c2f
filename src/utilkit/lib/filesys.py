"""
Minimal filesystem queries: existence, type, size, and line reading.

None of these raise for a missing or unreadable path; they answer False or
None instead.
"""

from pathlib import Path

from utilkit.lib.logger import Logger


def exists(path: str | Path) -> bool:
    """Return True if `path` is an existing file or directory."""

    return is_file(path) or is_dir(path)


def is_dir(path: str | Path) -> bool:
    """Return True if `path` is an existing directory."""

    return Path(path).is_dir()


def is_file(path: str | Path) -> bool:
    """Return True if `path` is an existing regular file."""

    return Path(path).is_file()


def fsize(path: str | Path) -> int | None:
    """
    Get the size of a file in bytes.

    Args:
        path (str | Path): The file whose size to get.

    Returns:
        int | None: The size in bytes, or None if the file does not exist or is a directory.
    """

    p = Path(path)
    if not p.is_file():
        return None

    try:
        return p.stat().st_size
    except OSError as err:
        Logger.debug(f"Cannot stat '{p}': {err}")
        return None


def readlines(path: str | Path, encoding: str = "utf-8") -> list[str] | None:
    """
    Read the lines of a text file.

    Args:
        path (str | Path): The file to read.
        encoding (str): Text encoding of the file.

    Returns:
        list[str] | None: The lines without their terminators, or None if the file
        could not be opened.
    """

    try:
        with open(path, encoding=encoding) as fp:
            return [line.rstrip("\n") for line in fp]
    except (OSError, UnicodeDecodeError) as err:
        Logger.debug(f"Cannot read '{path}': {err}")
        return None
