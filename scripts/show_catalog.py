#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
show_catalog.py: print what the gallery API would serve, straight from disk.

Usage (from repo root):
  python scripts/show_catalog.py                      # photo category summaries
  python scripts/show_catalog.py --kind video         # video category summaries
  python scripts/show_catalog.py --category people    # items in one photo category
  python scripts/show_catalog.py --kind video --all   # flattened list (incl. uncategorized fallback)
  python scripts/show_catalog.py --tsv                # tab-separated output
  python scripts/show_catalog.py --media-base /srv/PublicAssets --config ./gallery.toml

Notes:
  - Read-only: nothing is created or moved.
  - Exit code 2 for an unknown category, 1 if the tree cannot be scanned.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from gallery_api.core.categories import MediaKind
from gallery_api.core.config import load_settings
from gallery_api.core.errors import CatalogIOError, CategoryNotFound
from gallery_api.services.catalog import Catalog


def human_bytes(n: Optional[int]) -> str:
    if n is None:
        return ""
    step = 1024.0
    units = ["B", "KiB", "MiB", "GiB", "TiB"]
    s = float(n)
    for u in units:
        if s < step or u == units[-1]:
            return f"{s:.0f}{u}" if u == "B" else f"{s:.1f}{u}"
        s /= step
    return f"{n}B"


def print_table(headers: List[str], rows: List[dict], tsv: bool, empty_msg: str) -> None:
    if not rows:
        print(empty_msg)
        return
    if tsv:
        print("\t".join(headers))
        for r in rows:
            print("\t".join(r[h] for h in headers))
        return
    col_widths = [max(len(h), *(len(r[h]) for r in rows)) for h in headers]
    sep = "  "
    header_line = sep.join(h.ljust(w) for h, w in zip(headers, col_widths))
    print(header_line)
    print("-" * len(header_line))
    for r in rows:
        print(sep.join(r[h].ljust(w) for h, w in zip(headers, col_widths)))


def summary_rows(catalog: Catalog, kind: MediaKind) -> List[dict]:
    return [
        {
            "key": s.key,
            "name": s.display_name,
            "count": str(s.item_count),
            "cover": s.cover.name if s.cover else "",
        }
        for s in catalog.get_category_summaries(kind)
    ]


def item_rows(items) -> List[dict]:
    return [
        {
            "id": it.id,
            "category": it.category_key,
            "name": it.name,
            "size": human_bytes(it.size_bytes),
            "url": it.url,
        }
        for it in items
    ]


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Show gallery categories or items as the API sees them.")
    ap.add_argument("--kind", choices=[k.value for k in MediaKind], default="photo")
    g = ap.add_mutually_exclusive_group()
    g.add_argument("--category", help="List items in this category")
    g.add_argument("--all", action="store_true", help="List all items of the kind (flattened)")
    ap.add_argument("--config", help="Path to gallery.toml (default: GALLERY_CONFIG / search)")
    ap.add_argument("--media-base", help="Media base dir (overrides config and MEDIA_BASE_PATH)")
    ap.add_argument("--tsv", action="store_true", help="Tab-separated output")
    args = ap.parse_args(argv)

    if args.media_base:
        os.environ["MEDIA_BASE_PATH"] = args.media_base
    settings = load_settings(Path(args.config) if args.config else None)
    catalog = Catalog(settings)
    kind = MediaKind(args.kind)

    try:
        if args.category:
            rows = item_rows(catalog.get_category_items(kind, args.category))
            print_table(["id", "category", "name", "size", "url"], rows, args.tsv, "No items.")
        elif args.all:
            rows = item_rows(catalog.get_all_items(kind))
            print_table(["id", "category", "name", "size", "url"], rows, args.tsv, "No items.")
        else:
            rows = summary_rows(catalog, kind)
            print_table(["key", "name", "count", "cover"], rows, args.tsv, "No categories configured.")
    except CategoryNotFound as e:
        print(f"error: {e}", file=sys.stderr)
        print("known: " + ", ".join(settings.registry.keys(kind)), file=sys.stderr)
        return 2
    except CatalogIOError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
