from fastapi import APIRouter, HTTPException, Depends
import logging

from photostrip.models.session import (
    PhotoSession, SessionCreateRequest, PhotoUploadRequest, PhotoCropRequest,
    StripBuildRequest, SessionStatusResponse, StripResponse
)
from photostrip.models.layout import OutputFormat
from photostrip.services.imaging import encode_image, to_base64
from photostrip.services.photo import PhotoService
from photostrip.services.session import SessionService
from photostrip.api.dependencies import get_photo_service, get_session_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


def _active_session(session_service: SessionService) -> PhotoSession:
    session = session_service.current()
    if session is None:
        raise HTTPException(status_code=404, detail="No active session. Please create a session first.")
    return session


def _status(session: PhotoSession) -> SessionStatusResponse:
    return SessionStatusResponse(
        session_id=session.session_id,
        panel=session.panel,
        config=session.config,
        photo_count=len(session.photos),
        photos_remaining=session.photos_remaining,
        photos=[to_base64(encode_image(photo, OutputFormat.jpeg)) for photo in session.photos],
    )


@router.post("/create", response_model=SessionStatusResponse)
def create_session(
        request: SessionCreateRequest,
        session_service: SessionService = Depends(get_session_service)
):
    session = session_service.create(request.config)
    return _status(session)


@router.post("/configure", response_model=SessionStatusResponse)
def configure_session(
        request: SessionCreateRequest,
        session_service: SessionService = Depends(get_session_service)
):
    session = _active_session(session_service)
    session_service.configure(session, request.config)
    return _status(session)


@router.post("/photos", response_model=SessionStatusResponse)
def add_photo(
        request: PhotoUploadRequest,
        session_service: SessionService = Depends(get_session_service)
):
    session = _active_session(session_service)
    session_service.add_photo(session, request.image)
    return _status(session)


@router.put("/photos/{index}/crop", response_model=SessionStatusResponse)
def recrop_photo(
        index: int,
        request: PhotoCropRequest,
        session_service: SessionService = Depends(get_session_service)
):
    session = _active_session(session_service)
    session_service.recrop(session, index, request.rect)
    return _status(session)


@router.delete("/photos/{index}", response_model=SessionStatusResponse)
def remove_photo(index: int, session_service: SessionService = Depends(get_session_service)):
    session = _active_session(session_service)
    session_service.remove_photo(session, index)
    return _status(session)


@router.post("/next", response_model=SessionStatusResponse)
def next_panel(session_service: SessionService = Depends(get_session_service)):
    session = _active_session(session_service)
    session_service.advance(session)
    return _status(session)


@router.post("/back", response_model=SessionStatusResponse)
def previous_panel(session_service: SessionService = Depends(get_session_service)):
    session = _active_session(session_service)
    session_service.back(session)
    return _status(session)


@router.post("/start-over", response_model=SessionStatusResponse)
def start_over(session_service: SessionService = Depends(get_session_service)):
    session = _active_session(session_service)
    session_service.start_over(session)
    return _status(session)


@router.post("/strip", response_model=StripResponse)
def build_strip(
        request: StripBuildRequest,
        session_service: SessionService = Depends(get_session_service),
        photo_service: PhotoService = Depends(get_photo_service)
):
    session = _active_session(session_service)
    result = session_service.build_strip(session, request.format, request.date_line)
    logger.info("Built %s strip for session %s", request.format.value, session.session_id)
    return photo_service.strip_response(result, request.format, session.config.theme.value)


@router.get("/status", response_model=SessionStatusResponse)
def get_session_status(session_service: SessionService = Depends(get_session_service)):
    session = session_service.current()
    if session is None:
        return SessionStatusResponse(
            session_id=None,
            panel=None,
            config=None,
            photo_count=0,
            photos_remaining=0,
        )
    return _status(session)


@router.delete("/reset")
def reset_session(session_service: SessionService = Depends(get_session_service)):
    session_service.reset()
    return {"success": True}
