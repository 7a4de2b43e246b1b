# marketplace/services/image_service.py

import io
import logging
import os
import uuid
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from marketplace.config import settings
from marketplace.exceptions import ImageNotFoundError, InvalidImageError
from marketplace.models.images import Image as ImageRecord

logger = logging.getLogger(__name__)

# Accepted upload types and the extension files are saved with
ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}
PIL_FORMATS = {"jpg": "JPEG", "png": "PNG", "gif": "GIF", "webp": "WEBP"}

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5 MB

AVATARS_DIR = "avatars"
ADS_DIR = "ads"
AVATAR_SIZE = (200, 200)
AD_IMAGE_SIZE = (800, 800)


def has_transparency(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info


def resize_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """
    Fits the image inside width x height keeping its proportions and centres
    it on a canvas of exactly that size. Opaque images get a white
    background, transparent ones keep their alpha channel.
    """
    scale = min(width / image.width, height / image.height)
    scaled_size = (max(1, int(image.width * scale)), max(1, int(image.height * scale)))

    if has_transparency(image):
        mode, background = "RGBA", (0, 0, 0, 0)
    else:
        mode, background = "RGB", (255, 255, 255)

    resized = image.convert(mode).resize(scaled_size, Image.Resampling.BILINEAR)
    canvas = Image.new(mode, (width, height), background)
    canvas.paste(resized, ((width - scaled_size[0]) // 2, (height - scaled_size[1]) // 2))
    return canvas


class ImageService:
    """Validates, resizes and stores uploaded images under the upload directory."""

    def __init__(self, upload_dir: str = None):
        self.upload_dir = upload_dir or settings.UPLOAD_DIR

    def _resolve(self, file_path: str) -> str:
        """Maps a stored relative path to a file inside the upload directory."""
        if not file_path or os.path.isabs(file_path) or "\\" in file_path or ".." in file_path.split("/"):
            raise ValueError(f"Invalid image path: {file_path!r}")
        root = os.path.realpath(self.upload_dir)
        full_path = os.path.realpath(os.path.join(root, file_path))
        if os.path.commonpath([root, full_path]) != root:
            raise ValueError(f"Invalid image path: {file_path!r}")
        return full_path

    def upload_image(self, content: bytes, content_type: str, subdir: str, size: Tuple[int, int]) -> ImageRecord:
        """
        Validates the upload, resizes it to `size` and writes it under
        `subdir` with a random name. Returns an unsaved image record whose
        file_path is relative to the upload directory.
        """
        if not content:
            raise InvalidImageError("Image file must not be empty")
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise InvalidImageError(f"Unsupported image type: {content_type}")
        if len(content) > MAX_FILE_SIZE:
            raise InvalidImageError(f"Image exceeds {MAX_FILE_SIZE} bytes")

        try:
            with Image.open(io.BytesIO(content)) as source:
                source.load()
                processed = resize_image(source, *size)
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
            raise InvalidImageError("Uploaded file is not an image") from e

        extension = ALLOWED_CONTENT_TYPES[content_type]
        image_format = PIL_FORMATS[extension]
        if image_format == "JPEG" and processed.mode == "RGBA":
            flattened = Image.new("RGB", processed.size, (255, 255, 255))
            flattened.paste(processed, mask=processed.getchannel("A"))
            processed = flattened

        target_dir = os.path.join(self.upload_dir, subdir)
        os.makedirs(target_dir, exist_ok=True)
        file_name = f"{uuid.uuid4()}.{extension}"
        full_path = os.path.join(target_dir, file_name)
        processed.save(full_path, format=image_format)

        relative_path = f"{subdir}/{file_name}"
        logger.info(f"Stored image {relative_path} ({size[0]}x{size[1]})")
        return ImageRecord(
            file_path=relative_path,
            file_size=os.path.getsize(full_path),
            media_type=content_type,
        )

    def upload_avatar(self, content: bytes, content_type: str) -> ImageRecord:
        return self.upload_image(content, content_type, AVATARS_DIR, AVATAR_SIZE)

    def upload_ad_image(self, content: bytes, content_type: str) -> ImageRecord:
        return self.upload_image(content, content_type, ADS_DIR, AD_IMAGE_SIZE)

    def get_image(self, file_path: str) -> bytes:
        full_path = self._resolve(file_path)
        if not os.path.isfile(full_path):
            raise ImageNotFoundError(file_path)
        with open(full_path, "rb") as fh:
            return fh.read()

    def remove_file(self, file_path: str) -> None:
        """Deletes a stored file. A missing or undeletable file is logged, not raised."""
        try:
            os.remove(self._resolve(file_path))
            logger.debug(f"Removed image file {file_path}")
        except FileNotFoundError:
            logger.warning(f"Image file {file_path} was already gone")
        except OSError as e:
            logger.error(f"Could not remove image file {file_path}: {e}", exc_info=True)
