# gallery_api/schemas/media.py
from pydantic import BaseModel
from typing import Optional, List

from gallery_api.core.categories import MediaKind

class MediaItem(BaseModel):
    # id is a per-response sequence ("photo-1", "video-3"); not stable across calls
    id: str
    name: str
    url: str
    size_bytes: int
    kind: MediaKind
    category_key: str
    category_name: str

class CoverImage(BaseModel):
    name: str
    url: str
    thumb_url: Optional[str] = None

class CategorySummary(BaseModel):
    key: str
    display_name: str
    item_count: int
    cover: Optional[CoverImage] = None

class HealthStatus(BaseModel):
    status: str
    message: str
    timestamp: str
    photo_categories: List[str]
    video_categories: List[str]

class ErrorBody(BaseModel):
    detail: str
