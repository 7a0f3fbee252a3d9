"""Config -> Capture -> Strip wizard around the stateless cropping core.

The session object is owned by whoever drives the wizard; ``SessionService``
only keeps track of which one is current, the same single-active-session
model the HTTP routes expose.
"""

import logging
import uuid
from typing import Dict, Optional

from photostrip.config import settings
from photostrip.exceptions import InvalidArgumentError, InvalidTransitionError
from photostrip.models.layout import CompositeResult, CropRectangle, HeaderSpec, LayoutSpec, OutputFormat
from photostrip.models.session import Panel, PhotoboothConfig, PhotoSession
from photostrip.services.compositor import composite
from photostrip.services.cropper import crop_to_rectangle, crop_to_square
from photostrip.services.imaging import ImageSource, decode_image
from photostrip.services.themes import theme_preset

logger = logging.getLogger(__name__)


def strip_layout(config: PhotoboothConfig, date_line: Optional[str] = None) -> LayoutSpec:
    """Layout used by the photostrip download: a 2-column grid for the
    six-photo configuration, a single column otherwise."""
    preset = theme_preset(config.theme)
    spacing = settings.strip_spacing
    columns = 2 if config.photo_count == settings.grid_photo_count else 1
    return LayoutSpec(
        item_width=settings.strip_photo_width,
        item_height=settings.strip_photo_height,
        border_width=settings.strip_border_width if preset.border else 0,
        border_color=preset.border_color,
        padding=spacing,
        gap=spacing,
        columns=columns,
        column_gap=spacing,
        header=HeaderSpec(
            title=settings.header_title,
            date_line=date_line,
            height=settings.header_height,
            color=preset.text_color,
        ),
    )


class SessionService:
    def __init__(self):
        self.active_sessions: Dict[str, PhotoSession] = {}
        self.current_session: Optional[str] = None

    def create(self, config: PhotoboothConfig = None) -> PhotoSession:
        # Only one session is reachable at a time, so the old one is dropped
        self.reset()
        session = PhotoSession(session_id=str(uuid.uuid4()))
        self.active_sessions[session.session_id] = session
        self.current_session = session.session_id
        logger.info("Created session %s", session.session_id)
        if config is not None:
            self.configure(session, config)
        return session

    def current(self) -> Optional[PhotoSession]:
        if self.current_session is None:
            return None
        return self.active_sessions.get(self.current_session)

    def reset(self) -> None:
        if self.current_session is not None:
            self.active_sessions.pop(self.current_session, None)
        self.current_session = None

    @staticmethod
    def _require(session: PhotoSession, *panels: Panel) -> None:
        if session.panel not in panels:
            allowed = ", ".join(p.value for p in panels)
            raise InvalidTransitionError(f"Not allowed on the {session.panel.value} panel (needs {allowed})")

    @staticmethod
    def _check_index(session: PhotoSession, index: int) -> None:
        if index < 0 or index >= len(session.photos):
            raise InvalidArgumentError(f"Invalid photo index {index}", field="index")

    def configure(self, session: PhotoSession, config: PhotoboothConfig) -> None:
        self._require(session, Panel.config)
        session.config = config
        session.originals = []
        session.photos = []
        session.panel = Panel.capture
        logger.info(
            "Session %s configured: %d photos, %s mode, %s theme",
            session.session_id, config.photo_count, config.mode.value, config.theme.value,
        )

    def add_photo(self, session: PhotoSession, source: ImageSource) -> int:
        self._require(session, Panel.capture)
        if session.photos_remaining <= 0:
            raise InvalidArgumentError(
                f"You can only add {session.config.photo_count} photos", field="photos"
            )
        original = decode_image(source)
        square = crop_to_square(original, settings.square_size)
        session.originals.append(original)
        session.photos.append(square)
        logger.info(
            "Added photo %d/%d to session %s",
            len(session.photos), session.config.photo_count, session.session_id,
        )
        return len(session.photos) - 1

    def recrop(self, session: PhotoSession, index: int, rect: CropRectangle) -> None:
        self._require(session, Panel.capture, Panel.strip)
        self._check_index(session, index)
        session.photos[index] = crop_to_rectangle(session.originals[index], rect, settings.square_size)
        logger.info("Re-cropped photo %d in session %s to %s", index, session.session_id, rect.box)

    def remove_photo(self, session: PhotoSession, index: int) -> None:
        self._require(session, Panel.capture)
        self._check_index(session, index)
        del session.originals[index]
        del session.photos[index]

    def advance(self, session: PhotoSession) -> None:
        self._require(session, Panel.capture)
        if session.photos_remaining != 0:
            raise InvalidArgumentError(
                f"Please capture or upload {session.config.photo_count} photos "
                f"({len(session.photos)} so far)",
                field="photos",
            )
        session.panel = Panel.strip

    def back(self, session: PhotoSession) -> None:
        if session.panel == Panel.strip:
            session.panel = Panel.capture
        elif session.panel == Panel.capture:
            session.panel = Panel.config
        else:
            raise InvalidTransitionError("Already on the first panel")

    def start_over(self, session: PhotoSession) -> None:
        session.config = PhotoboothConfig()
        session.originals = []
        session.photos = []
        session.panel = Panel.config
        logger.info("Session %s started over", session.session_id)

    def build_strip(
        self,
        session: PhotoSession,
        output_format: OutputFormat = OutputFormat.png,
        date_line: Optional[str] = None,
    ) -> CompositeResult:
        self._require(session, Panel.strip)
        preset = theme_preset(session.config.theme)
        return composite(session.photos, strip_layout(session.config, date_line), preset.background, output_format)


session_service = SessionService()
