"""Tests for strip layout and rendering."""

import io

import pytest
from PIL import Image

from photostrip.exceptions import DecodeError, EmptyInputError, EncodingError, InvalidArgumentError
from photostrip.models.layout import BackgroundSpec, HeaderSpec, LayoutSpec, OutputFormat
from photostrip.services.compositor import (
    composite,
    compute_canvas_size,
    grid_cell,
    item_position,
    render_strip,
)

COLORS = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0), (0, 255, 255), (255, 0, 255)]


@pytest.fixture
def strip_layout():
    return LayoutSpec(item_width=400, border_width=1, padding=20, gap=10)


class TestCanvasSize:
    """Canvas sizing arithmetic."""

    def test_single_column_four_photos(self, strip_layout):
        assert compute_canvas_size(4, strip_layout) == (442, 1678)

    @pytest.mark.parametrize("count", [1, 2, 3, 5])
    def test_single_column_formula(self, strip_layout, count):
        width, height = compute_canvas_size(count, strip_layout)
        assert width == 442
        assert height == 40 + count * 402 + (count - 1) * 10

    def test_header_adds_height(self, strip_layout):
        layout = strip_layout.model_copy(update={"header": HeaderSpec(title="x", height=80)})
        assert compute_canvas_size(4, layout) == (442, 1678 + 80)

    def test_grid_six_photos(self):
        layout = LayoutSpec(
            item_width=360, item_height=300, padding=20, gap=20, columns=2, column_gap=20,
            header=HeaderSpec(height=80),
        )
        assert compute_canvas_size(6, layout) == (820, 1060)

    def test_grid_partial_last_row(self):
        layout = LayoutSpec(item_width=100, padding=0, gap=10, columns=2)
        # 3 photos still need 2 rows
        assert compute_canvas_size(3, layout) == (210, 2 * 110 + 10)

    def test_zero_count_is_empty_input(self, strip_layout):
        with pytest.raises(EmptyInputError):
            compute_canvas_size(0, strip_layout)


class TestItemPlacement:
    """Row-major placement."""

    def test_grid_cell_index_three(self):
        assert grid_cell(3, 2) == (1, 1)

    def test_single_column_positions(self, strip_layout):
        assert item_position(0, strip_layout) == (21, 21)
        assert item_position(2, strip_layout) == (21, 21 + 2 * 412)

    def test_grid_positions(self):
        layout = LayoutSpec(item_width=100, padding=5, gap=10, columns=2, column_gap=4)
        # column width 110, rows 110 apart
        assert item_position(0, layout) == (5, 10)
        assert item_position(1, layout) == (5 + 114, 10)
        assert item_position(3, layout) == (5 + 114, 10 + 110)


class TestRenderStrip:
    """Pixels on the rendered canvas."""

    def test_photos_border_and_background(self, make_png, strip_layout):
        images = [make_png(400, 400, color) for color in COLORS[:4]]
        canvas = render_strip(images, strip_layout, BackgroundSpec.solid("#ffffff"))

        assert canvas.size == (442, 1678)
        assert canvas.getpixel((0, 0)) == (255, 255, 255)
        assert canvas.getpixel((20, 20)) == (0, 0, 0)
        for i, color in enumerate(COLORS[:4]):
            x, y = item_position(i, strip_layout)
            assert canvas.getpixel((x, y)) == color
            assert canvas.getpixel((x + 399, y + 399)) == color
            assert canvas.getpixel((x + 400, y + 400)) == (0, 0, 0)

    def test_grid_order_is_row_major(self, make_png):
        layout = LayoutSpec(item_width=50, padding=5, gap=5, columns=2)
        images = [make_png(50, 50, color) for color in COLORS]
        canvas = render_strip(images, layout, BackgroundSpec())

        x, y = item_position(3, layout)
        assert canvas.getpixel((x + 25, y + 25)) == COLORS[3]
        x, y = item_position(4, layout)
        assert canvas.getpixel((x + 25, y + 25)) == COLORS[4]

    def test_grid_border_overlaps_spacing(self, make_png):
        layout = LayoutSpec(
            item_width=360, item_height=300, border_width=5, border_color="#92400e",
            padding=20, gap=20, columns=2, column_gap=20,
        )
        images = [make_png(360, 300, color) for color in COLORS]
        canvas = render_strip(images, layout, BackgroundSpec.solid("#ffffff"))

        assert canvas.size == (820, 980)
        assert item_position(0, layout) == (20, 20)
        assert canvas.getpixel((20, 20)) == COLORS[0]
        assert canvas.getpixel((15, 15)) == (146, 64, 14)
        x, y = item_position(5, layout)
        assert canvas.getpixel((x - 1, y - 1)) == (146, 64, 14)
        assert canvas.getpixel((x + 360 + 4, y + 300 + 4)) == (146, 64, 14)
        # between the columns, clear of both borders
        assert canvas.getpixel((410, 50)) == (255, 255, 255)

    def test_mismatched_photo_is_fitted(self, make_png):
        layout = LayoutSpec(item_width=80, item_height=60)
        canvas = render_strip([make_png(20, 20, (0, 255, 0))], layout, BackgroundSpec())

        assert canvas.size == (80, 60)
        r, g, b = canvas.getpixel((40, 30))
        assert r <= 1 and g >= 254 and b <= 1

    def test_gradient_runs_top_to_bottom(self, make_png):
        layout = LayoutSpec(item_width=10, padding=10)
        canvas = render_strip([make_png(10, 10)], layout, BackgroundSpec.gradient("#000000", "#ffffff"))

        assert canvas.getpixel((0, 0)) == (0, 0, 0)
        assert canvas.getpixel((0, canvas.height - 1)) == (255, 255, 255)
        assert canvas.getpixel((0, canvas.height // 2))[0] in range(100, 156)

    def test_header_text_is_drawn(self, make_png):
        layout = LayoutSpec(item_width=300, header=HeaderSpec(title="FUNKY PHOTOBOOTH", date_line="01/02/2025"))
        canvas = render_strip([make_png(300, 300)], layout, BackgroundSpec())

        band = canvas.crop((0, 0, 300, 80))
        assert band.getextrema() != ((255, 255), (255, 255), (255, 255))

    def test_render_is_deterministic(self, make_png):
        layout = LayoutSpec(item_width=64, border_width=2, padding=4, gap=3, header=HeaderSpec(title="A", date_line="B"))
        images = [make_png(64, 64, color) for color in COLORS[:3]]
        background = BackgroundSpec.gradient("#fef7cd", "#fbbf24")

        first = render_strip(images, layout, background)
        second = render_strip(images, layout, background)

        assert first.tobytes() == second.tobytes()


class TestComposite:
    """Encoded results and failure modes."""

    def test_png_round_trip_size(self, make_png, strip_layout):
        result = composite([make_png(400, 400)] * 4, strip_layout)

        assert result.mime_type == "image/png"
        with Image.open(io.BytesIO(result.data)) as img:
            assert img.size == (442, 1678)
        assert (result.width, result.height) == (442, 1678)

    def test_pdf_output(self, make_png, strip_layout):
        result = composite([make_png(400, 400)], strip_layout, output_format=OutputFormat.pdf)

        assert result.mime_type == "application/pdf"
        assert result.data.startswith(b"%PDF")

    def test_jpeg_output(self, make_png, strip_layout):
        result = composite([make_png(400, 400)], strip_layout, output_format="jpeg")
        assert result.mime_type == "image/jpeg"

    def test_empty_input(self, strip_layout):
        with pytest.raises(EmptyInputError):
            composite([], strip_layout)

    def test_empty_input_checked_before_format(self, strip_layout):
        with pytest.raises(EmptyInputError):
            composite([], strip_layout, output_format="gif")

    def test_unsupported_format(self, make_png, strip_layout):
        with pytest.raises(EncodingError):
            composite([make_png(400, 400)], strip_layout, output_format="gif")

    def test_decode_error_names_index(self, make_png, strip_layout):
        images = [make_png(400, 400), b"garbage", make_png(400, 400)]
        with pytest.raises(DecodeError) as exc_info:
            composite(images, strip_layout)
        assert exc_info.value.index == 1

    @pytest.mark.parametrize(
        "update",
        [{"item_width": 0}, {"columns": 0}, {"padding": -1}, {"gap": -2}, {"border_width": -1}],
    )
    def test_invalid_layout(self, make_png, strip_layout, update):
        with pytest.raises(InvalidArgumentError):
            composite([make_png(10, 10)], strip_layout.model_copy(update=update))

    def test_invalid_color(self, make_png, strip_layout):
        with pytest.raises(InvalidArgumentError):
            composite([make_png(10, 10)], strip_layout, BackgroundSpec.solid("not-a-color"))

    def test_gradient_without_end_color(self, make_png, strip_layout):
        with pytest.raises(InvalidArgumentError):
            composite([make_png(10, 10)], strip_layout, BackgroundSpec(kind="gradient"))
