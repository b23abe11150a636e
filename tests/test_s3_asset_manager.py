from unittest import mock

import pytest
from botocore.exceptions import ClientError

from shared.modules.assets.asset_manager_factory import create_asset_manager
from shared.modules.assets.local_asset_manager import LocalAssetManager
from shared.modules.assets.s3_asset_manager import CACHE_CONTROL, S3AssetManager


def client_error():
    return ClientError({"Error": {"Code": "SlowDown", "Message": "Please reduce your request rate."}}, "PutObject")


def test_upload_puts_object_and_returns_cdn_url():
    s3 = mock.MagicMock()
    manager = S3AssetManager("coursehub-assets", "eu-west-1", public_base_url="https://cdn.coursehub.io/", client=s3)

    url = manager.upload_bytes(b"data", "schools/s1/abc.webp", "image/webp")

    assert url == "https://cdn.coursehub.io/schools/s1/abc.webp"
    s3.put_object.assert_called_once_with(
        Bucket="coursehub-assets",
        Key="schools/s1/abc.webp",
        Body=b"data",
        ContentType="image/webp",
        CacheControl=CACHE_CONTROL,
    )


def test_bucket_url_is_used_without_cdn():
    manager = S3AssetManager("coursehub-assets", "eu-west-1", client=mock.MagicMock())
    assert manager.public_url("k.webp") == "https://coursehub-assets.s3.eu-west-1.amazonaws.com/k.webp"


def test_transient_s3_error_is_retried(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda seconds: None)
    s3 = mock.MagicMock()
    s3.put_object.side_effect = [client_error(), {}]
    manager = S3AssetManager("bucket", "eu-west-1", client=s3)

    assert manager.upload_bytes(b"data", "k.webp", "image/webp").endswith("/k.webp")
    assert s3.put_object.call_count == 2


def test_persistent_s3_error_is_raised(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda seconds: None)
    s3 = mock.MagicMock()
    s3.put_object.side_effect = client_error()
    manager = S3AssetManager("bucket", "eu-west-1", client=s3)

    with pytest.raises(ClientError):
        manager.upload_bytes(b"data", "k.webp", "image/webp")
    assert s3.put_object.call_count == 3


def test_school_image_keys_are_namespaced_and_unique():
    first = S3AssetManager.build_school_image_key("s1", ".webp")
    second = S3AssetManager.build_school_image_key("s1", "webp")
    assert first.startswith("schools/s1/") and first.endswith(".webp")
    assert first != second


def test_factory(tmp_path):
    local = create_asset_manager({"ASSET_STORAGE_PROVIDER": "local", "LOCAL_ASSET_ROOT": str(tmp_path)})
    assert isinstance(local, LocalAssetManager)
    assert local.public_url("a.webp") == "/assets/a.webp"

    with mock.patch("shared.modules.assets.s3_asset_manager.boto3") as boto3:
        s3 = create_asset_manager({
            "ASSET_STORAGE_PROVIDER": "S3",
            "S3_BUCKET_NAME": "bucket",
            "S3_REGION": "eu-west-1",
            "CDN_BASE_URL": "https://cdn.coursehub.io",
        })
    assert isinstance(s3, S3AssetManager)
    boto3.client.assert_called_once()

    with pytest.raises(ValueError):
        create_asset_manager({"ASSET_STORAGE_PROVIDER": "ftp"})


def test_local_keys_cannot_escape_the_filestore(tmp_path):
    manager = LocalAssetManager(base_dir=str(tmp_path))
    with pytest.raises(ValueError):
        manager.path_for("../outside.txt")
