import pytest
from fastapi.testclient import TestClient

from gallery_api.core.config import load_settings
from gallery_api.main import create_app
from gallery_api.services.catalog import Catalog

GALLERY_TOML = """
[paths]
media_base = "{media_base}"

[categories.photo]
landscapes = "Landscapes"
people = "People"
wedding = "Wedding"

[categories.video]
activity = "Activity"
TVC = "TVC"
"""


@pytest.fixture
def media_base(tmp_path):
    """Empty media tree root (PublicAssets) with photo/ and video/ kind dirs."""
    base = tmp_path / "PublicAssets"
    (base / "photo").mkdir(parents=True)
    (base / "video").mkdir(parents=True)
    return base


@pytest.fixture
def settings(tmp_path, media_base, monkeypatch):
    monkeypatch.delenv("MEDIA_BASE_PATH", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    cfg = tmp_path / "gallery.toml"
    cfg.write_text(GALLERY_TOML.format(media_base=media_base.as_posix()), encoding="utf-8")
    return load_settings(cfg)


@pytest.fixture
def catalog(settings):
    return Catalog(settings)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def put(path, data=b"x"):
    """Create a file (and its parent dirs) with the given bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
