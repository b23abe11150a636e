"""
Asset Manager Factory

This module provides a factory function to create the correct AssetManager
implementation from configuration. This decouples the application from the
concrete storage provider.
"""
from typing import Any, Mapping

from shared.modules.assets.asset_manager import AssetManager
from shared.modules.assets.local_asset_manager import LocalAssetManager
from shared.modules.assets.s3_asset_manager import S3AssetManager


def create_asset_manager(config: Mapping[str, Any]) -> AssetManager:
    """
    Factory function to create the appropriate AssetManager instance.

    It determines the implementation based on the `ASSET_STORAGE_PROVIDER`
    setting ("local" or "s3").

    Returns:
        AssetManager: A concrete implementation of the AssetManager.
    """
    provider = (config.get("ASSET_STORAGE_PROVIDER") or "local").lower()

    if provider == "s3":
        return S3AssetManager(
            bucket_name=config["S3_BUCKET_NAME"],
            region=config.get("S3_REGION") or "us-east-1",
            public_base_url=config.get("CDN_BASE_URL"),
            aws_access_key_id=config.get("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=config.get("AWS_SECRET_ACCESS_KEY"),
        )
    if provider == "local":
        # Default to local for development
        return LocalAssetManager(
            base_dir=config.get("LOCAL_ASSET_ROOT") or "local_filestore",
            public_base_url=config.get("CDN_BASE_URL") or "/assets",
        )
    raise ValueError(f"Unknown ASSET_STORAGE_PROVIDER: {provider}")
