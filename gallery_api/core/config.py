# gallery_api/core/config.py
# Loads gallery settings from a TOML file (defaults + overrides).
# - Reads GALLERY_CONFIG or searches for gallery.toml (CWD, parents, next to this file)
# - MEDIA_BASE_PATH / PORT env vars override the file
# - Normalizes extension lists (lowercase, ensure leading dot)
# - Category tables keep their TOML order; that order is the display order

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import tomli as tomllib  # py3.11+: tomllib in stdlib; using tomli for compatibility

from gallery_api.core.categories import CategoryDefinition, CategoryRegistry, MediaKind
from gallery_api.core.errors import ConfigError


# -------------------- Defaults (used if TOML omits keys) --------------------
_DEFAULTS = {
    "paths": {
        "media_base": "PublicAssets",   # resolved against CWD when relative
        "photo_subdir": "photo",
        "video_subdir": "video",
        "thumb_subdir": "thumb-cache",  # resolved under media_base's parent if relative
    },
    # Order matters: it is the order clients see categories in.
    "categories": {
        "photo": {
            "Documentary": "Documentary",
            "landscapes": "Landscapes",
            "Meeting": "Meeting",
            "people": "People",
            "wedding": "Wedding",
        },
        "video": {
            "activity": "Activity",
            "TVC": "TVC",
            "short_video": "Short Video",
        },
    },
    "catalog": {
        "uncategorized_name": "Uncategorized",
        "create_dirs": False,
    },
    "ext": {
        "photo": ["jpg", "jpeg", "png", "gif", "webp", "bmp"],
        "video": ["mp4", "avi", "mov", "wmv", "flv", "webm", "mkv"],
    },
    "server": {
        "host": "0.0.0.0",
        "port": 3001,
        "assets_prefix": "/assets",
        "cors_origins": ["http://localhost:5173", "http://127.0.0.1:5173"],
    },
    "logging": {
        "level": "INFO",
        # "dir": "/abs/or/relative/logs"  -> enables a rotating file log
    },
}


# -------------------- Read + merge TOML --------------------

def _find_config_path() -> Optional[Path]:
    """Find gallery.toml without user input.
    Priority:
      1) GALLERY_CONFIG
      2) ./gallery.toml (CWD)
      3) ascend parents from CWD looking for gallery.toml
      4) gallery.toml next to this file
    """
    # 1) Explicit env
    cfg_env = os.getenv("GALLERY_CONFIG")
    if cfg_env:
        p = Path(cfg_env).expanduser()
        if p.exists():
            return p

    # 2) + 3) CWD, then walk up to the filesystem root
    cur = Path.cwd()
    while True:
        candidate = cur / "gallery.toml"
        if candidate.exists():
            return candidate
        if cur.parent == cur:
            break
        cur = cur.parent

    # 4) sibling to this file
    app_default = Path(__file__).with_name("gallery.toml")
    if app_default.exists():
        return app_default

    return None


def _load_config_toml(path: Optional[Path] = None) -> dict:
    """Load TOML from `path` (or the best match) or return {} if not found."""
    path = path or _find_config_path()
    if path and path.exists():
        with path.open("rb") as f:
            return tomllib.load(f)
    return {}


def _norm_ext_list(exts: List[str]) -> frozenset:
    """
    Normalize extension strings: ensure leading dot and lowercase.
    Accepts 'jpg' or '.jpg' and returns '.jpg'.
    """
    out: set[str] = set()
    for e in exts:
        e = (e or "").strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            e = "." + e
        out.add(e)
    return frozenset(out)


def _categories_from(table: dict, kind: MediaKind) -> Tuple[CategoryDefinition, ...]:
    if not isinstance(table, dict):
        raise ConfigError(f"[categories.{kind.value}] must be a table of key = \"display name\"")
    out: list[CategoryDefinition] = []
    for key, name in table.items():
        key = str(key).strip()
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ConfigError(f"invalid {kind.value} category key {key!r}")
        out.append(CategoryDefinition(key=key, display_name=str(name)))
    return tuple(out)


# -------------------- Settings --------------------

@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration. Built once at startup by load_settings()."""
    media_base: Path
    kind_dirs: Dict[MediaKind, Path]
    kind_subdirs: Dict[MediaKind, str]
    extensions: Dict[MediaKind, frozenset]
    registry: CategoryRegistry
    thumb_dir: Path
    uncategorized_name: str = "Uncategorized"
    create_dirs: bool = False
    assets_prefix: str = "/assets"
    cors_origins: Tuple[str, ...] = ()
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    logs_dir: Optional[Path] = None
    config_path: Optional[Path] = field(default=None, compare=False)

    @property
    def photo_dir(self) -> Path:
        return self.kind_dirs[MediaKind.PHOTO]

    @property
    def video_dir(self) -> Path:
        return self.kind_dirs[MediaKind.VIDEO]

    def base_dir(self, kind: MediaKind) -> Path:
        return self.kind_dirs[kind]

    def category_dir(self, kind: MediaKind, key: str) -> Path:
        return self.kind_dirs[kind] / key


def load_settings(config_path: Optional[Path] = None, overrides: Optional[dict] = None) -> Settings:
    """
    Build Settings from defaults, the TOML file and environment overrides.
    `overrides` uses the same section layout as the TOML file (handy in tests).
    """
    path = Path(config_path) if config_path else _find_config_path()
    cfg = _load_config_toml(path) if path else {}
    overrides = overrides or {}

    def section(name: str) -> dict:
        return {**_DEFAULTS[name], **cfg.get(name, {}), **overrides.get(name, {})}

    # -------- Paths --------
    paths = section("paths")
    media_base_raw = os.getenv("MEDIA_BASE_PATH") or paths["media_base"]
    media_base = Path(media_base_raw).expanduser().resolve()

    subdirs = {
        MediaKind.PHOTO: str(paths["photo_subdir"]),
        MediaKind.VIDEO: str(paths["video_subdir"]),
    }
    kind_dirs = {kind: (media_base / sub).resolve() for kind, sub in subdirs.items()}

    thumb = Path(paths["thumb_subdir"]).expanduser()
    thumb_dir = thumb if thumb.is_absolute() else (media_base.parent / thumb)

    # -------- Categories --------
    # A category table in the file replaces the default table wholesale.
    cats_cfg = {**_DEFAULTS["categories"], **cfg.get("categories", {}), **overrides.get("categories", {})}
    registry = CategoryRegistry({
        MediaKind.PHOTO: _categories_from(cats_cfg.get("photo", {}), MediaKind.PHOTO),
        MediaKind.VIDEO: _categories_from(cats_cfg.get("video", {}), MediaKind.VIDEO),
    })

    # -------- Extensions --------
    ext_cfg = section("ext")
    extensions = {
        MediaKind.PHOTO: _norm_ext_list(list(ext_cfg.get("photo", []))),
        MediaKind.VIDEO: _norm_ext_list(list(ext_cfg.get("video", []))),
    }

    # -------- Catalog / server / logging --------
    catalog = section("catalog")
    server = section("server")
    log_cfg = section("logging")

    prefix = "/" + str(server["assets_prefix"]).strip("/")
    port = int(os.getenv("PORT") or server["port"])

    logs_dir = None
    if log_cfg.get("dir"):
        d = Path(log_cfg["dir"]).expanduser()
        logs_dir = d if d.is_absolute() else (media_base.parent / d)

    return Settings(
        media_base=media_base,
        kind_dirs=kind_dirs,
        kind_subdirs=subdirs,
        extensions=extensions,
        registry=registry,
        thumb_dir=thumb_dir.resolve(),
        uncategorized_name=str(catalog["uncategorized_name"]),
        create_dirs=bool(catalog["create_dirs"]),
        assets_prefix=prefix,
        cors_origins=tuple(server.get("cors_origins", [])),
        host=str(server["host"]),
        port=port,
        log_level=str(log_cfg.get("level", "INFO")).upper(),
        logs_dir=logs_dir,
        config_path=path,
    )


def ensure_layout(settings: Settings) -> List[Path]:
    """
    Create missing kind and category directories (legacy startup behavior).
    Returns the directories that were created.
    """
    created: list[Path] = []
    for kind in MediaKind:
        wanted = [settings.base_dir(kind)] + [
            settings.category_dir(kind, c.key) for c in settings.registry.list_categories(kind)
        ]
        for d in wanted:
            if not d.exists():
                d.mkdir(parents=True, exist_ok=True)
                created.append(d)
    return created
