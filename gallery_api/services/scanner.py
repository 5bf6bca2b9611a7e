# gallery_api/services/scanner.py
# Non-recursive directory listing filtered by a kind's extension set.
from __future__ import annotations

import logging
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, List

from gallery_api.core.errors import CatalogIOError

log = logging.getLogger("gallery.scanner")


@dataclass(frozen=True)
class ScannedFile:
    name: str
    size_bytes: int


def list_files(directory: Path, extensions: AbstractSet[str]) -> List[ScannedFile]:
    """
    Return the media files directly inside `directory`, in the order the
    filesystem enumerates them (no sorting; "first file" picks the cover).

    - missing directory (or not a directory) -> []
    - subdirectories are skipped, never descended into
    - any other OS error (permission denied, stat failure after listing)
      raises CatalogIOError for the whole call
    """
    try:
        if not stat.S_ISDIR(directory.stat().st_mode):
            return []
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as e:
        raise CatalogIOError("check directory", directory) from e

    try:
        children = list(directory.iterdir())
    except FileNotFoundError:
        # removed between the check and the listing
        return []
    except OSError as e:
        raise CatalogIOError("list directory", directory) from e

    out: list[ScannedFile] = []
    for child in children:
        if child.suffix.lower() not in extensions:
            continue
        try:
            st = child.stat()
        except OSError as e:
            raise CatalogIOError("stat file", child) from e
        if stat.S_ISDIR(st.st_mode):
            # "holiday.mp4/" style folder names
            continue
        out.append(ScannedFile(name=child.name, size_bytes=st.st_size))

    log.debug("scanned %s: kept %d of %d entries", directory, len(out), len(children))
    return out
