# gallery_api/utils/thumbs.py
# On-disk JPEG thumbnail cache: <sha1(path|h)>-<mtime_ns>.jpg under thumb_dir.
# Rebuilding for a newer mtime removes the older entries of the same path+height.
from pathlib import Path
import hashlib
import io
import logging

from PIL import Image, ImageOps
from fastapi.responses import FileResponse, Response

log = logging.getLogger("gallery.thumbs")


def thumb_key(abs_path: Path, h: int, thumb_dir: Path) -> Path:
    """Cache file for the current version of abs_path at height h."""
    stem = hashlib.sha1(f"{abs_path}|h={h}".encode()).hexdigest()
    return thumb_dir / f"{stem}-{abs_path.stat().st_mtime_ns}.jpg"


def _drop_stale(cache_path: Path) -> None:
    stem = cache_path.name.split("-", 1)[0]
    for old in cache_path.parent.glob(f"{stem}-*.jpg"):
        if old != cache_path:
            old.unlink(missing_ok=True)


def make_thumb_bytes(abs_path: Path, h: int) -> bytes:
    """Decode abs_path, honor EXIF orientation, scale to height h, encode as JPEG."""
    with Image.open(abs_path) as src:
        im = ImageOps.exif_transpose(src).convert("RGB")
    if im.height and im.height != h:
        width = max(round(im.width * h / im.height), 1)
        im = im.resize((width, h), Image.Resampling.LANCZOS)
    out = io.BytesIO()
    im.save(out, "JPEG", quality=82, optimize=True)
    return out.getvalue()


def serve_or_build_thumb(abs_path: Path, h: int, thumb_dir: Path):
    """
    Serve a cached thumbnail if present; otherwise build, cache, and serve it.
    Anything Pillow cannot turn into a thumbnail (videos, damaged or oversized
    images) is served as the original file.
    """
    cache_path = thumb_key(abs_path, h, thumb_dir)
    if cache_path.exists():
        return FileResponse(cache_path, media_type="image/jpeg")
    try:
        img_bytes = make_thumb_bytes(abs_path, h)
    except Exception as e:
        log.info("no thumbnail for %s (%s: %s); serving original", abs_path.name, type(e).__name__, e)
        return FileResponse(abs_path)
    try:
        thumb_dir.mkdir(parents=True, exist_ok=True)
        cache_path.write_bytes(img_bytes)
        _drop_stale(cache_path)
    except OSError as e:
        log.warning("could not cache thumbnail %s: %s", cache_path, e)
    return Response(img_bytes, media_type="image/jpeg")
