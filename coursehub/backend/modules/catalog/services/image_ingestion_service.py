import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from backend.modules.cache.cache_invalidator import CacheInvalidator
from backend.modules.catalog.models.school_model import SchoolModel
from shared.modules.assets.asset_manager import AssetManager, AssetStorageError
from shared.modules.assets.image_processor import ALLOWED_CONTENT_TYPES, ImageProcessor, InvalidImageError
from shared.modules.result.write_result import WriteResult

logger = logging.getLogger(__name__)

IMAGE_KINDS = ("image", "logo")


class ImageIngestionService:
    """
    Takes an uploaded school image, normalises it and stores it in the filestore.

    The school record is only touched once the upload succeeded, so a failure
    at any earlier stage leaves the school exactly as it was.
    """

    def __init__(self, asset_manager: AssetManager, image_processor: ImageProcessor,
                 invalidator: CacheInvalidator, max_upload_bytes: int):
        self.asset_manager = asset_manager
        self.image_processor = image_processor
        self.invalidator = invalidator
        self.max_upload_bytes = max_upload_bytes

    def ingest(self, school_id: Optional[str], file_storage, kind: str = "image") -> WriteResult:
        """
        Args:
            school_id: School the image belongs to.
            file_storage: werkzeug FileStorage from the multipart request.
            kind: "image" appends to the gallery, "logo" replaces the logo.
        """
        if not school_id:
            return WriteResult.invalid("school_id: field required")
        if kind not in IMAGE_KINDS:
            return WriteResult.invalid(f"kind: must be one of {', '.join(IMAGE_KINDS)}")
        if file_storage is None or not file_storage.filename:
            return WriteResult.invalid("file: no file provided")

        school = SchoolModel.find(school_id)
        if not school:
            return WriteResult.not_found(f"School not found: {school_id}")

        if file_storage.mimetype not in ALLOWED_CONTENT_TYPES:
            return WriteResult.invalid(f"file: unsupported content type {file_storage.mimetype or 'unknown'}")

        # Read one byte past the limit to detect oversized uploads without buffering them whole
        data = file_storage.stream.read(self.max_upload_bytes + 1)
        if len(data) > self.max_upload_bytes:
            return WriteResult.invalid(f"file: larger than {self.max_upload_bytes} bytes")
        if not data:
            return WriteResult.invalid("file: empty upload")

        try:
            processed = self.image_processor.process(data)
        except InvalidImageError as e:
            return WriteResult.invalid(f"file: {e}")

        key = self.asset_manager.build_school_image_key(school_id, processed.extension)
        try:
            url = self.asset_manager.upload_bytes(processed.data, key, processed.content_type)
        except (ClientError, BotoCoreError, OSError) as e:
            logger.exception(f"Upload of {key} failed; school {school_id} left unchanged")
            raise AssetStorageError(f"Could not store {key}") from e

        if kind == "logo":
            attached = SchoolModel.update(school_id, logo=url)
        else:
            attached = SchoolModel.push(school_id, "images", url)
        if not attached:
            # School deleted while the upload was in flight
            logger.warning(f"School {school_id} disappeared before {url} could be attached")
            return WriteResult.not_found(f"School not found: {school_id}")

        logger.info(f"Attached {kind} {url} to school {school_id}")
        self.invalidator.school_changed(school.slug)
        return WriteResult.created({
            "school_id": school_id,
            "kind": kind,
            "url": url,
            "width": processed.width,
            "height": processed.height,
        })
