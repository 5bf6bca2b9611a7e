# gallery_api/services/catalog.py
# Category summaries, per-category listings, flattened and combined views.
# Everything is derived from the filesystem on each call; nothing is cached.
from __future__ import annotations

import itertools
import logging
import urllib.parse
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional

from gallery_api.core.categories import UNCATEGORIZED, MediaKind
from gallery_api.core.config import Settings
from gallery_api.schemas.media import CategorySummary, CoverImage, MediaItem
from gallery_api.services.scanner import ScannedFile, list_files

log = logging.getLogger("gallery.catalog")


def _quote_path(*segments: str) -> str:
    """Percent-encode each segment so spaces/unicode survive the static mount."""
    return "/".join(urllib.parse.quote(s, safe="") for s in segments)


class Catalog:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.registry = settings.registry

    # ---------- urls ----------

    def asset_url(self, kind: MediaKind, name: str, category_key: Optional[str] = None) -> str:
        sub = self.settings.kind_subdirs[kind]
        parts = [sub, category_key, name] if category_key else [sub, name]
        return f"{self.settings.assets_prefix}/{_quote_path(*parts)}"

    def thumb_url(self, kind: MediaKind, name: str, category_key: Optional[str] = None) -> str:
        parts = [category_key, name] if category_key else [name]
        return f"/thumb/{kind.value}/{_quote_path(*parts)}"

    # ---------- helpers ----------

    def _scan(self, kind: MediaKind, category_key: Optional[str] = None) -> List[ScannedFile]:
        if category_key is None:
            directory = self.settings.base_dir(kind)
        else:
            directory = self.settings.category_dir(kind, category_key)
        return list_files(directory, self.settings.extensions[kind])

    def _to_items(
        self,
        kind: MediaKind,
        files: List[ScannedFile],
        ids: Iterator[int],
        category_key: str,
        category_name: str,
        in_root: bool = False,
    ) -> List[MediaItem]:
        url_key = None if in_root else category_key
        return [
            MediaItem(
                id=f"{kind.value}-{next(ids)}",
                name=f.name,
                url=self.asset_url(kind, f.name, url_key),
                size_bytes=f.size_bytes,
                kind=kind,
                category_key=category_key,
                category_name=category_name,
            )
            for f in files
        ]

    def _category_items(self, kind: MediaKind, key: str, ids: Iterator[int]) -> List[MediaItem]:
        name = self.registry.display_name_of(kind, key)  # raises CategoryNotFound
        return self._to_items(kind, self._scan(kind, key), ids, key, name)

    # ---------- public views ----------

    def get_category_summaries(self, kind: MediaKind) -> List[CategorySummary]:
        """One summary per configured category, in configured order, empty ones included."""
        out: list[CategorySummary] = []
        for cat in self.registry.list_categories(kind):
            files = self._scan(kind, cat.key)
            cover = None
            if files:
                first = files[0].name
                cover = CoverImage(
                    name=first,
                    url=self.asset_url(kind, first, cat.key),
                    thumb_url=self.thumb_url(kind, first, cat.key),
                )
            out.append(CategorySummary(
                key=cat.key,
                display_name=cat.display_name,
                item_count=len(files),
                cover=cover,
            ))
        return out

    def get_category_items(self, kind: MediaKind, category_key: str) -> List[MediaItem]:
        return self._category_items(kind, category_key, itertools.count(1))

    def get_all_items(self, kind: MediaKind) -> List[MediaItem]:
        """
        Flatten every category (category order, then file order).
        Videos only: when no category holds anything, fall back to files sitting
        directly in the video base dir (pre-category layout), tagged 'uncategorized'.
        """
        ids = itertools.count(1)
        items: list[MediaItem] = []
        for cat in self.registry.list_categories(kind):
            items.extend(self._category_items(kind, cat.key, ids))

        if not items and kind is MediaKind.VIDEO:
            root_files = self._scan(kind)
            if root_files:
                log.info("no categorized videos; serving %d root-level file(s) as %s",
                         len(root_files), UNCATEGORIZED)
            items = self._to_items(kind, root_files, ids, UNCATEGORIZED,
                                   self.settings.uncategorized_name, in_root=True)
        return items

    def get_combined_media(self) -> List[MediaItem]:
        """Photos then videos. Both scans run in parallel; either failing fails the whole call."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="catalog") as pool:
            photos = pool.submit(self.get_all_items, MediaKind.PHOTO)
            videos = pool.submit(self.get_all_items, MediaKind.VIDEO)
            # result() re-raises the worker's exception
            return photos.result() + videos.result()
