"""Listing of uploaded background images served under ``/upload/background``."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".webp"})
PUBLIC_PREFIX = "/upload/background"


class MediaService:
    def __init__(self, background_dir: Path):
        self.background_dir = Path(background_dir)

    def list_background_images(self) -> list[str]:
        """Public URLs of the image files, sorted by file name.

        Raises ``FileNotFoundError`` when the directory does not exist.
        """
        if not self.background_dir.is_dir():
            raise FileNotFoundError(str(self.background_dir))
        names = sorted(
            p.name for p in self.background_dir.iterdir()
            if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES
        )
        logger.debug(f"{len(names)} background images in {self.background_dir}")
        return [f"{PUBLIC_PREFIX}/{name}" for name in names]
