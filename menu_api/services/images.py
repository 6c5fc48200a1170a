"""Menu image upload and processing"""

import hashlib
import io
import os
import time
from dataclasses import dataclass
from typing import Optional, Tuple

import structlog
from fastapi import UploadFile
from PIL import Image, ImageOps, UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from menu_api.config import Settings
from menu_api.errors import ImageProcessingError, InvalidImageError

logger = structlog.get_logger()

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp")
URL_PREFIX = "/uploads/"


@dataclass
class ImageUploadResult:
    filename: str
    path: str
    thumb_path: str
    mime_type: str
    size: int

    @property
    def url(self) -> str:
        return f"{URL_PREFIX}{self.filename}"


class ImageService:
    """Stores uploaded images as WebP plus a square thumbnail"""

    def __init__(self, settings: Settings):
        self.uploads_dir = settings.uploads_dir
        self.thumbnails_dir = os.path.join(settings.uploads_dir, "thumbnails")
        self.max_bytes = settings.image_max_bytes
        self.quality = settings.image_quality
        self.thumbnail_size = (settings.thumbnail_size, settings.thumbnail_size)

    def initialize(self) -> None:
        """Create the upload directories"""
        os.makedirs(self.uploads_dir, exist_ok=True)
        os.makedirs(self.thumbnails_dir, exist_ok=True)

    @staticmethod
    def generate_filename(original_name: str) -> str:
        timestamp = int(time.time() * 1000)
        digest = hashlib.md5(f"{original_name}{timestamp}".encode()).hexdigest()[:8]
        return f"{digest}-{timestamp}.webp"

    def validate(self, upload: Optional[UploadFile], data: bytes) -> None:
        if upload is None or not upload.filename:
            raise InvalidImageError("No file provided")
        if upload.content_type not in ALLOWED_MIME_TYPES:
            raise InvalidImageError("Invalid file type")
        if len(data) > self.max_bytes:
            raise InvalidImageError("File size exceeds limit")
        if not data:
            raise InvalidImageError("Empty file")

    async def save_image(self, upload: UploadFile) -> ImageUploadResult:
        """Validate an upload and write the image and its thumbnail"""
        data = await upload.read()
        self.validate(upload, data)

        filename = self.generate_filename(upload.filename)
        result = await run_in_threadpool(self._write, data, filename)
        logger.info("Image saved", filename=filename, size=result.size)
        return result

    def _write(self, data: bytes, filename: str) -> ImageUploadResult:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise InvalidImageError("File is not a readable image") from e

        self.initialize()
        path = os.path.join(self.uploads_dir, filename)
        thumb_path = os.path.join(self.thumbnails_dir, f"thumb-{filename}")

        try:
            image = ImageOps.exif_transpose(image)
            if image.mode not in ("RGB", "RGBA"):
                image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
            image.save(path, "WEBP", quality=self.quality)

            thumbnail = ImageOps.fit(image, self.thumbnail_size, centering=(0.5, 0.5))
            thumbnail.save(thumb_path, "WEBP", quality=self.quality)
        except OSError as e:
            logger.error("Error saving image", filename=filename, error=str(e))
            for partial in (path, thumb_path):
                try:
                    os.remove(partial)
                except FileNotFoundError:
                    pass
            raise ImageProcessingError("Failed to save image") from e

        return ImageUploadResult(
            filename=filename,
            path=path,
            thumb_path=thumb_path,
            mime_type="image/webp",
            size=os.path.getsize(path),
        )

    def get_dimensions(self, path: str) -> Tuple[int, int]:
        try:
            with Image.open(path) as image:
                return image.size
        except (UnidentifiedImageError, OSError) as e:
            raise ImageProcessingError("Failed to get image dimensions") from e

    def delete_image(self, filename: str) -> None:
        """Remove an image and its thumbnail; missing files are ignored"""
        filename = os.path.basename(filename)
        for path in (
            os.path.join(self.uploads_dir, filename),
            os.path.join(self.thumbnails_dir, f"thumb-{filename}"),
        ):
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
        logger.info("Image deleted", filename=filename)

    @staticmethod
    def filename_from_url(url: Optional[str]) -> Optional[str]:
        """Filename of an image uploaded here, None for external URLs"""
        if not url or not url.startswith(URL_PREFIX):
            return None
        return os.path.basename(url[len(URL_PREFIX):]) or None
