from pydantic import BaseModel, ConfigDict
from typing import Optional
from enum import Enum


class OutputFormat(str, Enum):
    png = "png"
    jpeg = "jpeg"
    pdf = "pdf"

    @property
    def mime_type(self) -> str:
        return MIME_TYPES[self]

    @property
    def extension(self) -> str:
        return "jpg" if self is OutputFormat.jpeg else self.value


MIME_TYPES = {
    OutputFormat.png: "image/png",
    OutputFormat.jpeg: "image/jpeg",
    OutputFormat.pdf: "application/pdf",
}


class BackgroundKind(str, Enum):
    solid = "solid"
    gradient = "gradient"


class CropRectangle(BaseModel):
    # Bounds are checked against the source image by crop_to_rectangle
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self):
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class BackgroundSpec(BaseModel):
    kind: BackgroundKind = BackgroundKind.solid
    color: str = "#ffffff"
    end_color: Optional[str] = None

    @classmethod
    def solid(cls, color: str) -> "BackgroundSpec":
        return cls(kind=BackgroundKind.solid, color=color)

    @classmethod
    def gradient(cls, start: str, end: str) -> "BackgroundSpec":
        return cls(kind=BackgroundKind.gradient, color=start, end_color=end)


class HeaderSpec(BaseModel):
    title: str = ""
    date_line: Optional[str] = None
    show_date: bool = True
    height: int = 80
    color: str = "#000000"


class LayoutSpec(BaseModel):
    item_width: int = 400
    item_height: Optional[int] = None
    border_width: int = 0
    border_color: str = "#000000"
    padding: int = 0
    gap: int = 0
    columns: int = 1
    column_gap: Optional[int] = None
    header: Optional[HeaderSpec] = None

    @property
    def item_size(self):
        return (self.item_width, self.item_height if self.item_height is not None else self.item_width)

    @property
    def header_height(self) -> int:
        return self.header.height if self.header is not None else 0

    @property
    def effective_column_gap(self) -> int:
        return self.column_gap if self.column_gap is not None else self.gap

    @property
    def is_grid(self) -> bool:
        return self.columns > 1


class CompositeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str
    width: int
    height: int


class Theme(str, Enum):
    retro = "retro"
    minimalistic = "minimalistic"
    modern = "modern"
    vintage = "vintage"
    neon = "neon"
    classic = "classic"
