from urllib.parse import parse_qs, urlparse

import boto3
from botocore.config import Config

from asset_api.core.config import StorageSettings
from asset_api.infrastructure.storage import NullObjectStore, S3ObjectStore, build_object_store


def _client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        config=Config(signature_version="s3v4"),
    )


def test_s3_locator_is_presigned_for_key():
    store = S3ObjectStore("asset-bucket", _client(), expires_in=900)
    url = store.locator_for("assets/u1/logo.png")

    parsed = urlparse(url)
    assert "asset-bucket" in parsed.netloc + parsed.path
    assert parsed.path.endswith("/assets/u1/logo.png")
    query = parse_qs(parsed.query)
    assert query["X-Amz-Expires"] == ["900"]
    assert "X-Amz-Signature" in query


def test_build_object_store_without_bucket_disables_locators():
    store = build_object_store(StorageSettings())
    assert isinstance(store, NullObjectStore)
    assert store.locator_for("assets/u1/logo.png") is None


def test_build_object_store_with_bucket(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    store = build_object_store(StorageSettings(bucket="asset-bucket", url_expires_seconds=60))
    assert isinstance(store, S3ObjectStore)
    assert "X-Amz-Expires=60" in store.locator_for("a.png")
