from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
import logging


class Settings(BaseSettings):
    app_name: str = "Photostrip Booth"
    app_description: str = "Square-crop photos and composite them into a downloadable photostrip"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    # Center-crop size used for uploads and camera frames
    square_size: int = 400
    resample_filter: str = "LANCZOS"
    jpeg_quality: int = 95
    pdf_resolution: float = 72.0

    photo_count_choices: List[int] = [3, 4, 6]
    default_photo_count: int = 4
    grid_photo_count: int = 6

    strip_photo_width: int = 360
    strip_photo_height: int = 300
    strip_spacing: int = 20
    strip_border_width: int = 5
    header_height: int = 80
    header_title: str = "FUNKY PHOTOBOOTH"
    date_format: str = "%m/%d/%Y"

    font_paths: List[str] = [
        "arial.ttf",
        "/System/Library/Fonts/Arial.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ]
    bold_font_paths: List[str] = [
        "arialbd.ttf",
        "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    ]
    title_font_size: int = 24
    date_font_size: int = 14

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PHOTOSTRIP_")


settings = Settings()


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
