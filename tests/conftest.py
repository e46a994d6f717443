import base64
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import httpx
import pytest
from botocore.exceptions import ClientError
from mongomock_motor import AsyncMongoMockClient

from myflix.core.config import Settings
from myflix.data_access.storage_client import ObjectStorageClient
from myflix.server import create_app

TEST_BUCKET = "test-bucket"
PNG_BYTES = b"\x89PNG\r\n\x1a\n fake image body"


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeS3Backend:
    """In-memory buckets shared by every client a FakeSession hands out."""

    def __init__(self, page_size: int = 1000):
        self.buckets: Dict[str, Dict[str, Tuple[bytes, str]]] = {}
        self.page_size = page_size
        self.create_calls = 0
        self.last_create_kwargs: Optional[dict] = None
        self.put_calls = 0
        self.head_error: Optional[str] = None
        self.create_error: Optional[str] = None
        self.put_error: Optional[str] = None
        self.list_error: Optional[str] = None


class FakePaginator:
    def __init__(self, backend: FakeS3Backend):
        self.backend = backend

    def paginate(self, Bucket: str, Prefix: str = ""):
        return self._pages(Bucket, Prefix)

    async def _pages(self, bucket: str, prefix: str):
        if self.backend.list_error:
            raise client_error(self.backend.list_error, "ListObjectsV2")
        if bucket not in self.backend.buckets:
            raise client_error("NoSuchBucket", "ListObjectsV2")
        keys = sorted(k for k in self.backend.buckets[bucket] if k.startswith(prefix))
        size = self.backend.page_size
        for start in range(0, max(len(keys), 1), size):
            chunk = keys[start:start + size]
            page = {"KeyCount": len(chunk)}
            if chunk:
                page["Contents"] = [{"Key": k} for k in chunk]
            yield page


class FakeS3Client:
    def __init__(self, backend: FakeS3Backend):
        self.backend = backend

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    async def head_bucket(self, Bucket: str):
        if self.backend.head_error:
            raise client_error(self.backend.head_error, "HeadBucket")
        if Bucket not in self.backend.buckets:
            raise client_error("404", "HeadBucket")
        return {}

    async def create_bucket(self, Bucket: str, **kwargs):
        self.backend.create_calls += 1
        self.backend.last_create_kwargs = kwargs
        if self.backend.create_error:
            raise client_error(self.backend.create_error, "CreateBucket")
        if Bucket in self.backend.buckets:
            raise client_error("BucketAlreadyOwnedByYou", "CreateBucket")
        self.backend.buckets[Bucket] = {}
        return {"Location": f"/{Bucket}"}

    async def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str):
        self.backend.put_calls += 1
        if self.backend.put_error:
            raise client_error(self.backend.put_error, "PutObject")
        if Bucket not in self.backend.buckets:
            raise client_error("NoSuchBucket", "PutObject")
        self.backend.buckets[Bucket][Key] = (Body, ContentType)
        return {"ETag": '"etag"'}

    def get_paginator(self, operation_name: str):
        assert operation_name == "list_objects_v2"
        return FakePaginator(self.backend)


class FakeSession:
    """Stands in for ``aioboto3.Session``; records the kwargs each client was opened with."""

    def __init__(self, backend: FakeS3Backend):
        self.backend = backend
        self.client_calls: List[dict] = []

    def client(self, service_name: str, **kwargs):
        assert service_name == "s3"
        self.client_calls.append(kwargs)
        return FakeS3Client(self.backend)


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        S3_BUCKET=TEST_BUCKET,
        AWS_REGION="us-east-1",
        UPLOADS_DIR=str(tmp_path / "uploads"),
        BACKEND_CORS_ORIGINS=["*"],
    )


@pytest.fixture
def s3_backend() -> FakeS3Backend:
    backend = FakeS3Backend()
    backend.buckets[TEST_BUCKET] = {}
    return backend


@pytest.fixture
def storage(s3_backend) -> ObjectStorageClient:
    return ObjectStorageClient(bucket_name=TEST_BUCKET, session=FakeSession(s3_backend))


@pytest.fixture
def mongo_db():
    return AsyncMongoMockClient()["myflix_test"]


@pytest.fixture
def app(test_settings, mongo_db, storage):
    application = create_app(test_settings)
    # Stand-ins for what the lifespan would build
    Path(test_settings.UPLOADS_DIR).mkdir(parents=True, exist_ok=True)
    application.state.db = mongo_db
    application.state.storage = storage
    application.state.database_ready = True
    application.state.bucket_ready = True
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
