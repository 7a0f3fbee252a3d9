from pydantic import BaseModel, ConfigDict, Field, field_validator
from PIL import Image
from typing import List, Optional
from enum import Enum

from photostrip.config import settings
from photostrip.models.layout import BackgroundSpec, CropRectangle, LayoutSpec, OutputFormat, Theme


class Panel(str, Enum):
    config = "config"
    capture = "capture"
    strip = "strip"


class PhotoMode(str, Enum):
    camera = "camera"
    upload = "upload"


class PhotoboothConfig(BaseModel):
    photo_count: int = settings.default_photo_count
    mode: PhotoMode = PhotoMode.upload
    theme: Theme = Theme.retro

    @field_validator("photo_count")
    @classmethod
    def check_photo_count(cls, value: int) -> int:
        if value not in settings.photo_count_choices:
            raise ValueError(f"photo_count must be one of {settings.photo_count_choices}")
        return value


class PhotoSession(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    session_id: str
    config: PhotoboothConfig = Field(default_factory=PhotoboothConfig)
    panel: Panel = Panel.config
    # Decoded sources, kept so a photo can be re-cropped by hand later
    originals: List[Image.Image] = []
    photos: List[Image.Image] = []

    @property
    def photos_remaining(self) -> int:
        return self.config.photo_count - len(self.photos)


class SessionCreateRequest(BaseModel):
    config: PhotoboothConfig = Field(default_factory=PhotoboothConfig)


class PhotoUploadRequest(BaseModel):
    image: str


class PhotoCropRequest(BaseModel):
    rect: CropRectangle


class SquareCropRequest(BaseModel):
    image: str
    size: int = settings.square_size
    format: OutputFormat = OutputFormat.jpeg


class RectangleCropRequest(BaseModel):
    image: str
    rect: CropRectangle
    size: Optional[int] = None
    format: OutputFormat = OutputFormat.jpeg


class StripRequest(BaseModel):
    images: List[str]
    layout: LayoutSpec = Field(default_factory=LayoutSpec)
    background: BackgroundSpec = Field(default_factory=BackgroundSpec)
    format: OutputFormat = OutputFormat.png
    theme: Optional[Theme] = None


class StripBuildRequest(BaseModel):
    format: OutputFormat = OutputFormat.png
    date_line: Optional[str] = None


class ImageResponse(BaseModel):
    image: str
    mime_type: str
    width: int
    height: int


class StripResponse(ImageResponse):
    filename: str


class SessionStatusResponse(BaseModel):
    session_id: Optional[str]
    panel: Optional[Panel]
    config: Optional[PhotoboothConfig]
    photo_count: int
    photos_remaining: int
    photos: List[str] = []
