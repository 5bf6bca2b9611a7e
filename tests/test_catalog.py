from concurrent.futures import ThreadPoolExecutor

import pytest

from gallery_api.core.categories import MediaKind
from gallery_api.core.errors import CatalogIOError, CategoryNotFound

from conftest import put


def test_summaries_list_every_category_even_when_missing(catalog):
    summaries = catalog.get_category_summaries(MediaKind.PHOTO)
    assert [s.key for s in summaries] == ["landscapes", "people", "wedding"]
    assert [s.display_name for s in summaries] == ["Landscapes", "People", "Wedding"]
    assert all(s.item_count == 0 and s.cover is None for s in summaries)


def test_summaries_when_base_dir_is_missing(catalog, media_base):
    (media_base / "video").rmdir()
    summaries = catalog.get_category_summaries(MediaKind.VIDEO)
    assert [(s.key, s.item_count, s.cover) for s in summaries] == [("activity", 0, None), ("TVC", 0, None)]


def test_summary_counts_and_cover(catalog, media_base):
    put(media_base / "photo" / "people" / "solo.jpg")
    put(media_base / "photo" / "people" / "notes.txt")
    (media_base / "photo" / "wedding").mkdir()

    by_key = {s.key: s for s in catalog.get_category_summaries(MediaKind.PHOTO)}
    assert by_key["people"].item_count == 1
    assert by_key["people"].cover.name == "solo.jpg"
    assert by_key["people"].cover.url == "/assets/photo/people/solo.jpg"
    assert by_key["people"].cover.thumb_url == "/thumb/photo/people/solo.jpg"
    assert by_key["wedding"].item_count == 0
    assert by_key["wedding"].cover is None


def test_cover_is_first_file_in_enumeration_order(catalog, media_base):
    d = media_base / "photo" / "landscapes"
    for n in ["b.png", "a.jpg", "c.gif"]:
        put(d / n)
    first = next(p.name for p in d.iterdir())
    summary = catalog.get_category_summaries(MediaKind.PHOTO)[0]
    assert summary.item_count == 3
    assert summary.cover.name == first


def test_category_items_filter_and_tag(catalog, media_base):
    d = media_base / "photo" / "people"
    put(d / "a.jpg", b"aaaa")
    put(d / "b.txt")
    put(d / "c.png", b"cc")

    items = catalog.get_category_items(MediaKind.PHOTO, "people")
    assert {i.name for i in items} == {"a.jpg", "c.png"}
    for i in items:
        assert i.kind is MediaKind.PHOTO
        assert i.category_key == "people"
        assert i.category_name == "People"
        assert i.url == f"/assets/photo/people/{i.name}"
    assert {i.name: i.size_bytes for i in items} == {"a.jpg": 4, "c.png": 2}
    assert len({i.id for i in items}) == 2


def test_unknown_category_raises_not_empty_list(catalog, media_base):
    put(media_base / "photo" / "secret" / "x.jpg")
    with pytest.raises(CategoryNotFound):
        catalog.get_category_items(MediaKind.PHOTO, "secret")
    # photo key is not a video key
    with pytest.raises(CategoryNotFound):
        catalog.get_category_items(MediaKind.VIDEO, "people")


def test_missing_category_dir_lists_empty(catalog):
    assert catalog.get_category_items(MediaKind.PHOTO, "wedding") == []


def test_all_items_follow_category_order(catalog, media_base):
    put(media_base / "photo" / "wedding" / "w1.jpg")
    put(media_base / "photo" / "landscapes" / "l1.jpg")
    put(media_base / "photo" / "people" / "p1.jpg")
    put(media_base / "photo" / "stray.jpg")  # root files are never used for photos

    items = catalog.get_all_items(MediaKind.PHOTO)
    assert [i.category_key for i in items] == ["landscapes", "people", "wedding"]
    assert [i.id for i in items] == ["photo-1", "photo-2", "photo-3"]


def test_photos_have_no_root_fallback(catalog, media_base):
    put(media_base / "photo" / "stray.jpg")
    assert catalog.get_all_items(MediaKind.PHOTO) == []


def test_video_root_fallback_when_categories_empty(catalog, media_base):
    (media_base / "video" / "activity").mkdir()
    put(media_base / "video" / "root.mp4", b"12")
    put(media_base / "video" / "readme.md")

    items = catalog.get_all_items(MediaKind.VIDEO)
    assert len(items) == 1
    it = items[0]
    assert it.name == "root.mp4"
    assert it.category_key == "uncategorized"
    assert it.category_name == "Uncategorized"
    assert it.url == "/assets/video/root.mp4"
    assert it.size_bytes == 2


def test_video_root_ignored_once_a_category_has_files(catalog, media_base):
    put(media_base / "video" / "root.mp4")
    put(media_base / "video" / "TVC" / "ad.mov")
    items = catalog.get_all_items(MediaKind.VIDEO)
    assert [(i.name, i.category_key) for i in items] == [("ad.mov", "TVC")]


def test_video_fallback_with_missing_base_dir(catalog, media_base):
    (media_base / "video").rmdir()
    assert catalog.get_all_items(MediaKind.VIDEO) == []


def test_combined_media_photos_then_videos(catalog, media_base):
    put(media_base / "photo" / "people" / "p1.jpg")
    put(media_base / "photo" / "wedding" / "w1.webp")
    put(media_base / "video" / "activity" / "v1.mp4")
    put(media_base / "video" / "TVC" / "v2.mkv")
    put(media_base / "video" / "TVC" / "v3.avi")

    combined = catalog.get_combined_media()
    n_photos = len(catalog.get_all_items(MediaKind.PHOTO))
    assert n_photos == 2
    assert len(combined) == 5
    assert all(i.kind is MediaKind.PHOTO for i in combined[:n_photos])
    assert all(i.kind is MediaKind.VIDEO for i in combined[n_photos:])
    assert len({i.id for i in combined}) == len(combined)


def test_combined_media_fails_when_one_scan_fails(catalog, media_base):
    put(media_base / "photo" / "people" / "p1.jpg")
    d = media_base / "video" / "activity"
    d.mkdir()
    (d / "vanished.mp4").symlink_to(d / "deleted.mp4")

    with pytest.raises(CatalogIOError):
        catalog.get_combined_media()


def test_urls_are_percent_encoded(catalog, media_base):
    put(media_base / "photo" / "people" / "summer day 婚礼 #1.jpg")
    item = catalog.get_category_items(MediaKind.PHOTO, "people")[0]
    assert item.name == "summer day 婚礼 #1.jpg"
    assert item.url == "/assets/photo/people/summer%20day%20%E5%A9%9A%E7%A4%BC%20%231.jpg"


def test_concurrent_calls_agree(catalog, media_base):
    for n in range(5):
        put(media_base / "photo" / "people" / f"{n}.jpg")
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: catalog.get_category_summaries(MediaKind.PHOTO), range(8)))
    assert all(r == results[0] for r in results)
    assert results[0][1].item_count == 5


def test_counts_are_never_stale(catalog, media_base):
    put(media_base / "photo" / "people" / "a.jpg")
    assert catalog.get_category_summaries(MediaKind.PHOTO)[1].item_count == 1
    put(media_base / "photo" / "people" / "b.jpg")
    assert catalog.get_category_summaries(MediaKind.PHOTO)[1].item_count == 2
