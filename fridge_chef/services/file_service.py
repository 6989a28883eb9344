"""File handling service for photo uploads."""
import base64
import logging
from dataclasses import dataclass
from io import BytesIO

from fastapi import UploadFile
from PIL import Image, ImageOps, UnidentifiedImageError

from fridge_chef.config import settings

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/webp"]


@dataclass
class ImageUpload:
    """An uploaded photo, ready to store as a blob or send to the detector."""

    data: bytes
    content_type: str
    filename: str = ""

    @property
    def data_url(self) -> str:
        encoded = base64.standard_b64encode(self.data).decode("utf-8")
        return f"data:{self.content_type};base64,{encoded}"


class FileService:
    """Service for validating and normalizing uploaded images."""

    def __init__(
        self,
        max_bytes: int = settings.max_upload_bytes,
        max_width: int = settings.max_image_width,
    ):
        self.max_bytes = max_bytes
        self.max_width = max_width

    async def read_image(self, file: UploadFile) -> ImageUpload:
        """
        Read an uploaded image into memory.

        Args:
            file: Uploaded file from FastAPI

        Returns:
            ImageUpload with optimized bytes

        Raises:
            ValueError: If file type is invalid, file is empty or too large
        """
        if file.content_type not in ALLOWED_CONTENT_TYPES:
            raise ValueError(
                f"Invalid file type: {file.content_type}. Allowed: {ALLOWED_CONTENT_TYPES}"
            )

        contents = await file.read()
        if not contents:
            raise ValueError("Uploaded image is empty")
        if len(contents) > self.max_bytes:
            raise ValueError(
                f"Image too large: {len(contents)} bytes (max {self.max_bytes})"
            )

        content_type = "image/jpeg" if file.content_type == "image/jpg" else file.content_type
        upload = ImageUpload(
            data=contents, content_type=content_type, filename=file.filename or ""
        )
        return self._optimize_image(upload)

    def _optimize_image(self, upload: ImageUpload) -> ImageUpload:
        """
        Downsize and re-encode the image.

        Images Pillow cannot read are returned unchanged.
        """
        try:
            with Image.open(BytesIO(upload.data)) as img:
                # Respect camera orientation before dropping EXIF
                img = ImageOps.exif_transpose(img)

                # Convert RGBA to RGB if needed
                if img.mode in ("RGBA", "P"):
                    img = img.convert("RGBA")
                    rgb_img = Image.new("RGB", img.size, (255, 255, 255))
                    rgb_img.paste(img, mask=img.split()[3])
                    img = rgb_img

                # Resize if too large
                if img.width > self.max_width:
                    ratio = self.max_width / img.width
                    new_height = int(img.height * ratio)
                    img = img.resize(
                        (self.max_width, new_height), Image.Resampling.LANCZOS
                    )

                output = BytesIO()
                img.convert("RGB").save(output, format="JPEG", optimize=True, quality=85)

        except (UnidentifiedImageError, OSError) as e:
            logger.warning("Could not optimize image %s: %s", upload.filename, e)
            return upload

        return ImageUpload(
            data=output.getvalue(), content_type="image/jpeg", filename=upload.filename
        )


# Singleton instance
file_service = FileService()
