from photostrip.services.photo import photo_service
from photostrip.services.session import session_service


def get_photo_service():
    return photo_service


def get_session_service():
    return session_service
