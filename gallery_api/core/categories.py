# gallery_api/core/categories.py
# Media kinds and the static category registry (key -> display name per kind).
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from gallery_api.core.errors import CategoryNotFound


class MediaKind(str, Enum):
    PHOTO = "photo"
    VIDEO = "video"


UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class CategoryDefinition:
    key: str            # directory name under the kind's base dir
    display_name: str


class CategoryRegistry:
    """
    Read-only lookup of the configured categories.
    Iteration order is configuration order, never sorted.
    """

    def __init__(self, categories: Mapping[MediaKind, Iterable[CategoryDefinition]]) -> None:
        by_kind: Dict[MediaKind, Tuple[CategoryDefinition, ...]] = {}
        names: Dict[MediaKind, Mapping[str, str]] = {}
        for kind in MediaKind:
            defs = tuple(categories.get(kind, ()))
            by_kind[kind] = defs
            names[kind] = MappingProxyType({d.key: d.display_name for d in defs})
        self._by_kind = MappingProxyType(by_kind)
        self._names = MappingProxyType(names)

    def list_categories(self, kind: MediaKind) -> Tuple[CategoryDefinition, ...]:
        return self._by_kind[kind]

    def keys(self, kind: MediaKind) -> list[str]:
        return [d.key for d in self._by_kind[kind]]

    def is_valid_category(self, kind: MediaKind, key: str) -> bool:
        return key in self._names[kind]

    def display_name_of(self, kind: MediaKind, key: str) -> str:
        try:
            return self._names[kind][key]
        except KeyError:
            raise CategoryNotFound(kind.value, key) from None

    def __repr__(self) -> str:
        counts = ", ".join(f"{k.value}={len(v)}" for k, v in self._by_kind.items())
        return f"CategoryRegistry({counts})"
