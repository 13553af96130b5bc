"""Depth-limited directory walking with directory and file callbacks."""

import os
from typing import Callable, Optional, Union

MAX_ENTRIES = 10
MAX_PATH_SIZE = 256

DirCallback = Callable[[str, str], bool]
FileCallback = Callable[[str, str], None]


def walkdir(
    path: Union[str, "os.PathLike[str]"],
    depth: int = 10,
    dir_callback: Optional[DirCallback] = None,
    file_callback: Optional[FileCallback] = None,
) -> None:
    """Walk ``path``, reporting directories and regular files to the callbacks.

    Both callbacks receive the full path of the entry and its last path
    component. A directory is only descended into while ``depth`` is above
    zero and ``dir_callback`` returns true; without a ``dir_callback``
    directories are not entered. Entries whose name starts with a dot are
    ignored, as are symbolic links, devices and other special files.
    If ``path`` itself is an existing non-directory it is reported to
    ``file_callback`` with the path given as both arguments. A path that
    does not exist or cannot be read is silently skipped.
    """
    path = os.fspath(path)
    try:
        with os.scandir(path) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except NotADirectoryError:
        if file_callback is not None:
            file_callback(path, path)
        return
    except OSError:
        return

    for entry in entries:
        if entry.name.startswith("."):
            continue
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file(follow_symlinks=False)
        except OSError:
            continue
        full_path = os.path.join(path, entry.name)
        if is_dir:
            if depth > 0 and dir_callback is not None and dir_callback(full_path, entry.name):
                walkdir(full_path, depth - 1, dir_callback, file_callback)
        elif is_file and file_callback is not None:
            file_callback(full_path, entry.name)