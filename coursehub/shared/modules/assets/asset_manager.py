"""
Asset Manager Interface

This module defines the abstract base class for all Asset Manager implementations.
This ensures that any concrete class (e.g., S3, Local) provides the same
interface for storing uploaded images and resolving their public URLs.
"""
import uuid
from abc import ABC, abstractmethod


class AssetStorageError(Exception):
    """The filestore could not store an asset."""


class AssetManager(ABC):
    """
    Abstract base class for storing assets and resolving their public URLs.
    """

    def __init__(self, public_base_url: str):
        self.public_base_url = public_base_url.rstrip("/")

    @staticmethod
    def build_school_image_key(school_id: str, extension: str) -> str:
        """
        Object key for a school image, namespaced by the school identifier.

        Example: "schools/5f0c.../9b1e....webp"
        """
        return f"schools/{school_id}/{uuid.uuid4().hex}.{extension.lstrip('.')}"

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    @abstractmethod
    def upload_bytes(self, data: bytes, key: str, content_type: str) -> str:
        """
        Stores an in-memory file under the given key.

        Args:
            data (bytes): The file contents.
            key (str): The object key (path) inside the filestore.
            content_type (str): MIME type stored with the object.

        Returns:
            str: The public URL of the uploaded file.
        """
        pass
