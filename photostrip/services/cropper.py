import logging
from typing import Optional, Tuple

from PIL import Image

from photostrip.exceptions import InvalidArgumentError
from photostrip.models.layout import CropRectangle
from photostrip.services.imaging import ImageSource, decode_image, resample_filter

logger = logging.getLogger(__name__)


def _check_size(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(f"{field} must be a positive integer, got {value!r}", field=field)
    return value


def square_region(width: int, height: int) -> CropRectangle:
    """Centered square covering the full shorter side of a width x height image."""
    if width > height:
        return CropRectangle(x=(width - height) // 2, y=0, width=height, height=height)
    return CropRectangle(x=0, y=(height - width) // 2, width=width, height=width)


def _resample(img: Image.Image, rect: CropRectangle, size: Tuple[int, int]) -> Image.Image:
    region = img.crop(rect.box)
    if region.size == size:
        return region
    return region.resize(size, resample=resample_filter())


def crop_to_square(source: ImageSource, target_size: int) -> Image.Image:
    """Center-crop ``source`` to a square and resample it to ``target_size``.

    Landscape images lose equal strips on the left and right, portrait
    images lose them at the top and bottom. A square source whose side
    already equals ``target_size`` comes back unchanged.

    Raises:
        InvalidArgumentError: If target_size is not a positive integer
        DecodeError: If the source cannot be decoded
    """
    _check_size(target_size, "target_size")
    img = decode_image(source)

    rect = square_region(img.width, img.height)
    logger.debug(
        "Square crop %dx%d -> region %s -> %dx%d",
        img.width, img.height, rect.box, target_size, target_size,
    )
    return _resample(img, rect, (target_size, target_size))


def crop_to_rectangle(source: ImageSource, rect: CropRectangle, output_size: Optional[int] = None) -> Image.Image:
    """Crop a caller-chosen region and resample it to a square.

    Rectangles that reach outside the image are rejected, never clamped.
    Without ``output_size`` the square's side is the source's shorter side.
    """
    if output_size is not None:
        _check_size(output_size, "output_size")
    if rect.width <= 0 or rect.height <= 0:
        raise InvalidArgumentError(
            f"Crop rectangle must have a positive size, got {rect.width}x{rect.height}", field="rect"
        )
    if rect.x < 0 or rect.y < 0:
        raise InvalidArgumentError(f"Crop rectangle origin ({rect.x}, {rect.y}) is negative", field="rect")

    img = decode_image(source)
    if output_size is None:
        output_size = min(img.width, img.height)
    if rect.x + rect.width > img.width or rect.y + rect.height > img.height:
        raise InvalidArgumentError(
            f"Crop rectangle {rect.box} extends past the {img.width}x{img.height} image", field="rect"
        )

    logger.debug("Manual crop region %s -> %dx%d", rect.box, output_size, output_size)
    return _resample(img, rect, (output_size, output_size))
