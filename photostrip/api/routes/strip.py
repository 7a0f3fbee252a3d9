from fastapi import APIRouter, Depends
from fastapi.responses import Response

from photostrip.models.session import StripRequest, StripResponse
from photostrip.services.photo import PhotoService
from photostrip.api.dependencies import get_photo_service

router = APIRouter(prefix="/strip", tags=["strip"])


def _theme_name(request: StripRequest):
    return request.theme.value if request.theme is not None else None


@router.post("", response_model=StripResponse)
def create_strip(request: StripRequest, photo_service: PhotoService = Depends(get_photo_service)):
    result = photo_service.create_strip(request)
    return photo_service.strip_response(result, request.format, _theme_name(request))


@router.post("/download")
def download_strip(request: StripRequest, photo_service: PhotoService = Depends(get_photo_service)):
    result = photo_service.create_strip(request)
    filename = photo_service.strip_filename(request.format, _theme_name(request))
    return Response(
        content=result.data,
        media_type=result.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
