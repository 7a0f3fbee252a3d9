"""Decoding and encoding helpers shared by the cropper and the compositor."""

import base64
import binascii
import io
import logging
from typing import Union

import cv2
import numpy as np
from PIL import Image, ImageFont, ImageOps, UnidentifiedImageError

from photostrip.config import settings
from photostrip.exceptions import DecodeError, EncodingError, InvalidArgumentError
from photostrip.models.layout import OutputFormat

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, str, Image.Image, np.ndarray]

PIL_FORMATS = {
    OutputFormat.png: "PNG",
    OutputFormat.jpeg: "JPEG",
    OutputFormat.pdf: "PDF",
}


def decode_image(source: ImageSource, index: int = None) -> Image.Image:
    """Turn any accepted source representation into an RGB ``PIL.Image``.

    Args:
        source: Encoded bytes, base64 text (optionally a data URL), a PIL
            image, or an OpenCV BGR frame
        index: Position of the image in a batch, reported on failure

    Returns:
        A fully loaded RGB image detached from any underlying buffer

    Raises:
        DecodeError: If the source is empty, corrupt or of an unknown type
    """
    if isinstance(source, Image.Image):
        return source if source.mode == "RGB" else source.convert("RGB")
    if isinstance(source, np.ndarray):
        return _from_frame(source, index)
    if isinstance(source, str):
        source = _from_base64(source, index)
    if not isinstance(source, (bytes, bytearray)):
        raise DecodeError(f"Unsupported image source type: {type(source).__name__}", index=index)
    if not source:
        raise DecodeError("Image data is empty", index=index)

    try:
        with Image.open(io.BytesIO(source)) as img:
            img.load()
            img = ImageOps.exif_transpose(img)
            return img.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as e:
        raise DecodeError(f"Could not decode image: {e}", index=index) from e


def _from_base64(text: str, index: int = None) -> bytes:
    if text.startswith("data:"):
        _, _, text = text.partition(",")
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 image data: {e}", index=index) from e


def _from_frame(frame: np.ndarray, index: int = None) -> Image.Image:
    # Camera frames come straight from cv2.VideoCapture.read(), i.e. BGR
    if frame.size == 0 or frame.dtype != np.uint8:
        raise DecodeError("Camera frame must be a non-empty uint8 array", index=index)
    if frame.ndim == 2:
        rgb = cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
    elif frame.ndim == 3 and frame.shape[2] == 3:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
    elif frame.ndim == 3 and frame.shape[2] == 4:
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGRA2RGB)
    else:
        raise DecodeError(f"Unsupported camera frame shape: {frame.shape}", index=index)
    return Image.fromarray(rgb)


def encode_image(img: Image.Image, output_format: Union[OutputFormat, str] = OutputFormat.png) -> bytes:
    try:
        output_format = OutputFormat(output_format)
    except ValueError as e:
        raise EncodingError(f"Unsupported output format: {output_format}", output_format=str(output_format)) from e

    options = {}
    if output_format == OutputFormat.jpeg:
        options["quality"] = settings.jpeg_quality
    elif output_format == OutputFormat.pdf:
        # One page, sized so that 1 canvas pixel is 1 point
        options["resolution"] = settings.pdf_resolution

    buffer = io.BytesIO()
    try:
        img.convert("RGB").save(buffer, format=PIL_FORMATS[output_format], **options)
    except (OSError, ValueError, KeyError) as e:
        raise EncodingError(f"Failed to encode {output_format.value}: {e}", output_format=output_format.value) from e
    return buffer.getvalue()


def to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def resample_filter(name: str = None) -> Image.Resampling:
    name = (name or settings.resample_filter).upper()
    try:
        return Image.Resampling[name]
    except KeyError:
        raise InvalidArgumentError(f"Unknown resample filter: {name}", field="resample_filter")


def load_font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    paths = settings.bold_font_paths if bold else settings.font_paths
    for font_path in paths:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError:
            continue
    logger.debug("No TrueType font found, falling back to Pillow's default font")
    return ImageFont.load_default(size=size)
