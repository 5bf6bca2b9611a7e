# gallery_api/utils/http.py
from pathlib import Path
from typing import Optional


def safe_rel_under(base: Path, target: Path) -> Optional[Path]:
    """
    Return target's path relative to base if target is inside base, else None.
    Prevents path traversal.
    """
    try:
        return target.resolve().relative_to(base.resolve())
    except ValueError:
        return None
