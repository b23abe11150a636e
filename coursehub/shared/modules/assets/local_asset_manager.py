"""
Local Asset Manager

This is a concrete implementation of the AssetManager for a local
development environment. It writes files to the local filesystem instead of
a remote filestore; the app serves them back from /assets/<key>.
"""
import logging
import os
from shared.modules.assets.asset_manager import AssetManager

logger = logging.getLogger(__name__)


class LocalAssetManager(AssetManager):
    """
    Manages assets on the local filesystem. Ideal for development and testing.
    """

    def __init__(self, base_dir: str = "local_filestore", public_base_url: str = "/assets"):
        """
        Initializes the LocalAssetManager.

        Args:
            base_dir (str): The root directory for storing assets.
            public_base_url (str): URL prefix the stored files are served from.
        """
        super().__init__(public_base_url)
        self.base_dir = os.path.abspath(base_dir)
        os.makedirs(self.base_dir, exist_ok=True)
        logger.info(f"LocalAssetManager initialized. Files will be stored in: {self.base_dir}")

    def path_for(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.base_dir, key))
        if not path.startswith(self.base_dir + os.sep):
            raise ValueError(f"Asset key escapes the filestore: {key}")
        return path

    def upload_bytes(self, data: bytes, key: str, content_type: str) -> str:
        destination_path = self.path_for(key)
        os.makedirs(os.path.dirname(destination_path), exist_ok=True)
        with open(destination_path, "wb") as f:
            f.write(data)
        logger.info(f"LocalAssetManager: stored {len(data)} bytes at {destination_path}")
        return self.public_url(key)
