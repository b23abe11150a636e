"""
Image normalisation for uploaded school photos and logos.

Uploads are decoded with Pillow, shrunk to fit a square bounding box and
re-encoded as WebP before they reach the filestore.
"""
import io
from typing import NamedTuple

from PIL import Image, ImageOps, UnidentifiedImageError

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}
ALLOWED_FORMATS = {"JPEG", "PNG", "WEBP"}


class InvalidImageError(ValueError):
    pass


class ProcessedImage(NamedTuple):
    data: bytes
    content_type: str
    extension: str
    width: int
    height: int


class ImageProcessor:
    def __init__(self, max_dimension: int = 1600, quality: int = 80):
        self.max_dimension = max_dimension
        self.quality = quality

    def process(self, data: bytes) -> ProcessedImage:
        """
        Decode, resize and convert an uploaded image.

        Raises:
            InvalidImageError: if the bytes are not a supported image.
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                if img.format not in ALLOWED_FORMATS:
                    raise InvalidImageError(f"Unsupported image format: {img.format}")
                img.load()
                img = ImageOps.exif_transpose(img)
                if img.mode not in ("RGB", "RGBA"):
                    img = img.convert("RGBA" if "transparency" in img.info or img.mode in ("LA", "PA") else "RGB")

                img.thumbnail((self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS)

                out = io.BytesIO()
                img.save(out, "WEBP", quality=self.quality, method=4)
                return ProcessedImage(
                    data=out.getvalue(),
                    content_type="image/webp",
                    extension="webp",
                    width=img.width,
                    height=img.height,
                )
        except (UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise InvalidImageError(f"Could not read image: {e}")
        except OSError as e:
            raise InvalidImageError(f"Corrupt image: {e}")
