"""Lay square photos out on one canvas and encode the resulting photostrip.

Two arrangements are supported. A single column stacks every photo inside
one outer padding::

    width  = item_width + 2*border + 2*padding
    height = header + 2*padding + n*(item_height + 2*border) + (n-1)*gap

A grid (``columns > 1``) gives every column its own padding and uses the
row gap above, between and below the rows. Borders there are drawn into
the surrounding spacing and take no room of their own::

    width  = columns*(item_width + 2*padding) + (columns-1)*column_gap
    height = header + rows*(item_height + gap) + gap

Photos are placed row-major in the order they were given.
"""

import logging
import math
from datetime import date
from typing import List, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageOps

from photostrip.config import settings
from photostrip.exceptions import EmptyInputError, EncodingError, InvalidArgumentError
from photostrip.models.layout import (
    BackgroundKind,
    BackgroundSpec,
    CompositeResult,
    HeaderSpec,
    LayoutSpec,
    OutputFormat,
)
from photostrip.services.imaging import ImageSource, decode_image, encode_image, load_font, resample_filter

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


def _parse_color(value: str, field: str) -> RGB:
    try:
        return ImageColor.getrgb(value)[:3]
    except (ValueError, AttributeError) as e:
        raise InvalidArgumentError(f"Invalid color {value!r}: {e}", field=field) from e


def validate_layout(layout: LayoutSpec) -> None:
    item_width, item_height = layout.item_size
    for field, value in (("item_width", item_width), ("item_height", item_height), ("columns", layout.columns)):
        if value <= 0:
            raise InvalidArgumentError(f"{field} must be positive, got {value}", field=field)
    for field, value in (
        ("border_width", layout.border_width),
        ("padding", layout.padding),
        ("gap", layout.gap),
        ("column_gap", layout.effective_column_gap),
        ("header.height", layout.header_height),
    ):
        if value < 0:
            raise InvalidArgumentError(f"{field} must not be negative, got {value}", field=field)


def compute_canvas_size(count: int, layout: LayoutSpec) -> Tuple[int, int]:
    if count <= 0:
        raise EmptyInputError()
    item_width, item_height = layout.item_size
    border = layout.border_width
    padding = layout.padding

    if not layout.is_grid:
        width = item_width + 2 * border + 2 * padding
        height = layout.header_height + 2 * padding + count * (item_height + 2 * border) + (count - 1) * layout.gap
        return width, height

    rows = math.ceil(count / layout.columns)
    # Grid borders sit in the spacing around each photo, not in the cell
    column_width = item_width + 2 * padding
    width = layout.columns * column_width + (layout.columns - 1) * layout.effective_column_gap
    height = layout.header_height + rows * (item_height + layout.gap) + layout.gap
    return width, height


def grid_cell(index: int, columns: int) -> Tuple[int, int]:
    return index // columns, index % columns


def item_position(index: int, layout: LayoutSpec) -> Tuple[int, int]:
    """Top-left corner of the photo itself (inside its border)."""
    item_width, item_height = layout.item_size
    border = layout.border_width
    padding = layout.padding

    if not layout.is_grid:
        x = padding + border
        y = layout.header_height + padding + index * (item_height + 2 * border + layout.gap) + border
        return x, y

    row, col = grid_cell(index, layout.columns)
    column_width = item_width + 2 * padding
    x = col * (column_width + layout.effective_column_gap) + padding
    y = layout.header_height + layout.gap + row * (item_height + layout.gap)
    return x, y


def _background_colors(background: BackgroundSpec) -> Tuple[RGB, RGB]:
    start = _parse_color(background.color, "background.color")
    if background.kind == BackgroundKind.solid:
        return start, start
    if background.end_color is None:
        raise InvalidArgumentError("Gradient background needs an end_color", field="background.end_color")
    return start, _parse_color(background.end_color, "background.end_color")


def _fill_background(size: Tuple[int, int], start: RGB, end: RGB) -> Image.Image:
    if start == end:
        return Image.new("RGB", size, start)

    width, height = size
    # Vertical linear gradient, first row is exactly `start`, last row `end`
    t = np.linspace(0.0, 1.0, height).reshape(height, 1, 1)
    start_arr = np.array(start, dtype=np.float64)
    end_arr = np.array(end, dtype=np.float64)
    rows = np.rint(start_arr + (end_arr - start_arr) * t).astype(np.uint8)
    return Image.fromarray(np.repeat(rows, width, axis=1))


def _draw_header(canvas: Image.Image, header: HeaderSpec) -> None:
    draw = ImageDraw.Draw(canvas)
    color = _parse_color(header.color, "header.color")
    center_x = canvas.width / 2

    if header.title:
        draw.text(
            (center_x, header.height * 0.5),
            header.title,
            fill=color,
            font=load_font(settings.title_font_size, bold=True),
            anchor="ms",
        )

    date_line = header.date_line
    if date_line is None and header.show_date:
        date_line = date.today().strftime(settings.date_format)
    if date_line:
        draw.text(
            (center_x, header.height * 0.8125),
            date_line,
            fill=color,
            font=load_font(settings.date_font_size),
            anchor="ms",
        )


def _fit(img: Image.Image, size: Tuple[int, int]) -> Image.Image:
    if img.size == size:
        return img
    return ImageOps.fit(img, size, method=resample_filter())


def render_strip(images: Sequence[ImageSource], layout: LayoutSpec, background: BackgroundSpec) -> Image.Image:
    """Render the photostrip canvas without encoding it.

    Raises:
        EmptyInputError: If ``images`` is empty
        InvalidArgumentError: If the layout or a color is invalid
        DecodeError: If any image fails to decode; ``index`` names it
    """
    if not images:
        raise EmptyInputError("Cannot build a photostrip from zero photos")
    validate_layout(layout)
    start, end = _background_colors(background)
    border_color = _parse_color(layout.border_color, "border_color")
    if layout.header is not None:
        _parse_color(layout.header.color, "header.color")

    # Decode everything first so a bad photo aborts before any drawing
    decoded: List[Image.Image] = [decode_image(source, index=i) for i, source in enumerate(images)]

    size = compute_canvas_size(len(decoded), layout)
    logger.debug("Canvas %dx%d for %d photos", size[0], size[1], len(decoded))
    canvas = _fill_background(size, start, end)

    if layout.header is not None:
        _draw_header(canvas, layout.header)

    item_size = layout.item_size
    border = layout.border_width
    draw = ImageDraw.Draw(canvas)
    for i, img in enumerate(decoded):
        x, y = item_position(i, layout)
        if border > 0:
            draw.rectangle(
                [x - border, y - border, x + item_size[0] + border - 1, y + item_size[1] + border - 1],
                fill=border_color,
            )
        canvas.paste(_fit(img, item_size), (x, y))

    return canvas


def composite(
    images: Sequence[ImageSource],
    layout: LayoutSpec,
    background: BackgroundSpec = None,
    output_format: Union[OutputFormat, str] = OutputFormat.png,
) -> CompositeResult:
    """Build the photostrip and encode it as ``output_format``.

    Either a complete strip comes back or an error is raised; nothing is
    returned for a partially drawn canvas.
    """
    if not images:
        raise EmptyInputError("Cannot build a photostrip from zero photos")
    try:
        output_format = OutputFormat(output_format)
    except ValueError as e:
        raise EncodingError(f"Unsupported output format: {output_format}", output_format=str(output_format)) from e

    canvas = render_strip(images, layout, background or BackgroundSpec())
    data = encode_image(canvas, output_format)

    logger.info(
        "Created %dx%d photostrip from %d photos (%s, %d column(s))",
        canvas.width, canvas.height, len(images), output_format.value, layout.columns,
    )
    return CompositeResult(
        data=data,
        mime_type=output_format.mime_type,
        width=canvas.width,
        height=canvas.height,
    )
