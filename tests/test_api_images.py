import pytest

from .conftest import PNG_BYTES, TEST_BUCKET, b64

VALID_UPLOAD = {"image": b64(PNG_BYTES), "filename": "poster.png", "mimetype": "image/png"}


def stored_keys(backend, prefix=""):
    return [k for k in backend.buckets[TEST_BUCKET] if k.startswith(prefix)]


async def test_upload_stores_image_and_returns_url(client, s3_backend):
    response = await client.post("/upload", json=VALID_UPLOAD)

    assert response.status_code == 200
    image_url = response.json()["imageUrl"]
    assert "poster.png" in image_url
    assert image_url.startswith(f"https://{TEST_BUCKET}.s3.amazonaws.com/original-images/")

    keys = stored_keys(s3_backend, "original-images/")
    assert len(keys) == 1
    assert image_url.endswith(keys[0])
    assert keys[0].endswith("_poster.png")
    assert s3_backend.buckets[TEST_BUCKET][keys[0]] == (PNG_BYTES, "image/png")


async def test_upload_is_listed_under_original_images(client, storage):
    response = await client.post("/upload", json=VALID_UPLOAD)
    assert response.status_code == 200

    keys = await storage.list_objects("original-images/")
    assert any(response.json()["imageUrl"].endswith(key) for key in keys)


@pytest.mark.parametrize("missing", ["image", "filename", "mimetype"])
async def test_upload_with_missing_field_writes_nothing(client, s3_backend, missing):
    payload = {k: v for k, v in VALID_UPLOAD.items() if k != missing}

    response = await client.post("/upload", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["kind"] == "upload_input_error"
    assert body["detail"] == {"missing": [missing]}
    assert s3_backend.put_calls == 0


async def test_upload_with_empty_field_counts_as_missing(client, s3_backend):
    response = await client.post("/upload", json=dict(VALID_UPLOAD, filename=""))

    assert response.status_code == 400
    assert s3_backend.put_calls == 0


async def test_upload_rejects_invalid_base64(client, s3_backend):
    response = await client.post("/upload", json=dict(VALID_UPLOAD, image="%%% not base64 %%%"))

    assert response.status_code == 400
    assert response.json()["kind"] == "upload_input_error"
    assert s3_backend.put_calls == 0


async def test_upload_sanitizes_path_traversal(client, s3_backend):
    response = await client.post("/upload", json=dict(VALID_UPLOAD, filename="../../etc/passwd"))

    assert response.status_code == 200
    (key,) = stored_keys(s3_backend)
    assert key.startswith("original-images/")
    assert key.endswith("_passwd")
    assert ".." not in key


async def test_upload_rejects_filename_without_usable_characters(client, s3_backend):
    response = await client.post("/upload", json=dict(VALID_UPLOAD, filename="../"))

    assert response.status_code == 400
    assert s3_backend.put_calls == 0


async def test_upload_storage_failure(client, s3_backend):
    s3_backend.put_error = "ServiceUnavailable"

    response = await client.post("/upload", json=VALID_UPLOAD)

    assert response.status_code == 500
    assert response.json()["kind"] == "storage_error"


async def test_upload_without_storage_client(app, client):
    app.state.storage = None

    response = await client.post("/upload", json=VALID_UPLOAD)

    assert response.status_code == 503


async def test_list_images_returns_thumbnail_urls_only(client, s3_backend):
    s3_backend.buckets[TEST_BUCKET].update({
        "thumbnails/a.png": (b"a", "image/png"),
        "thumbnails/b.png": (b"b", "image/png"),
        "original-images/1_a.png": (b"a", "image/png"),
    })

    response = await client.get("/images")

    assert response.status_code == 200
    assert sorted(response.json()) == [
        f"https://{TEST_BUCKET}.s3.amazonaws.com/thumbnails/a.png",
        f"https://{TEST_BUCKET}.s3.amazonaws.com/thumbnails/b.png",
    ]


async def test_list_images_empty(client):
    response = await client.get("/images")

    assert response.status_code == 200
    assert response.json() == []


async def test_list_images_storage_failure(client, s3_backend):
    s3_backend.list_error = "AccessDenied"

    response = await client.get("/images")

    assert response.status_code == 500
    assert response.json()["kind"] == "storage_error"
