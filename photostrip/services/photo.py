from datetime import datetime
from typing import Optional

from photostrip.config import settings
from photostrip.models.layout import CompositeResult, OutputFormat
from photostrip.models.session import ImageResponse, RectangleCropRequest, SquareCropRequest, StripRequest, StripResponse
from photostrip.services.compositor import composite
from photostrip.services.cropper import crop_to_rectangle, crop_to_square
from photostrip.services.imaging import encode_image, to_base64
from photostrip.services.themes import theme_preset


class PhotoService:
    def square(self, request: SquareCropRequest) -> ImageResponse:
        img = crop_to_square(request.image, request.size)
        return self._image_response(img, request.format)

    def crop(self, request: RectangleCropRequest) -> ImageResponse:
        img = crop_to_rectangle(request.image, request.rect, request.size)
        return self._image_response(img, request.format)

    def create_strip(self, request: StripRequest) -> CompositeResult:
        layout, background = request.layout, request.background
        if request.theme is not None:
            preset = theme_preset(request.theme)
            background = preset.background
            update = {
                "border_color": preset.border_color,
                "border_width": settings.strip_border_width if preset.border else layout.border_width,
            }
            if layout.header is not None:
                update["header"] = layout.header.model_copy(update={"color": preset.text_color})
            layout = layout.model_copy(update=update)
        return composite(request.images, layout, background, request.format)

    def strip_response(self, result: CompositeResult, output_format: OutputFormat, theme: Optional[str] = None) -> StripResponse:
        return StripResponse(
            image=to_base64(result.data),
            mime_type=result.mime_type,
            width=result.width,
            height=result.height,
            filename=self.strip_filename(output_format, theme),
        )

    @staticmethod
    def strip_filename(output_format: OutputFormat, theme: Optional[str] = None) -> str:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        prefix = f"photostrip-{theme}" if theme else "photostrip"
        return f"{prefix}-{stamp}.{OutputFormat(output_format).extension}"

    @staticmethod
    def _image_response(img, output_format: OutputFormat) -> ImageResponse:
        data = encode_image(img, output_format)
        return ImageResponse(
            image=to_base64(data),
            mime_type=OutputFormat(output_format).mime_type,
            width=img.width,
            height=img.height,
        )


photo_service = PhotoService()
