from fastapi import APIRouter, Depends

from photostrip.models.session import ImageResponse, RectangleCropRequest, SquareCropRequest
from photostrip.services.photo import PhotoService
from photostrip.api.dependencies import get_photo_service

router = APIRouter(prefix="/photos", tags=["photos"])


@router.post("/square", response_model=ImageResponse)
def square_crop(request: SquareCropRequest, photo_service: PhotoService = Depends(get_photo_service)):
    return photo_service.square(request)


@router.post("/crop", response_model=ImageResponse)
def rectangle_crop(request: RectangleCropRequest, photo_service: PhotoService = Depends(get_photo_service)):
    return photo_service.crop(request)
