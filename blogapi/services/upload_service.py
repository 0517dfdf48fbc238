import logging
import time
import uuid

from flask import current_app, has_request_context, request

from blogapi.errors import BlogError, ValidationError
from blogapi.extensions.minio_client import ensure_bucket, get_minio_client


logger = logging.getLogger(__name__)

ALLOWED_IMAGE_MIME_TYPES = {
    "image/jpeg": "jpeg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}

UPLOAD_PREFIX = "blog-images"


class MediaStorageError(BlogError):
    status_code = 503
    default_message = "Media storage is unavailable"


def build_media_url(object_name: str) -> str:
    base_url = current_app.config.get("APP_PUBLIC_BASE_URL", "").rstrip("/")
    if not base_url and has_request_context():
        base_url = request.url_root.rstrip("/")
    return f"{base_url}/api/media/{object_name}"


def _stream_length(file_storage):
    stream = getattr(file_storage, "stream", file_storage)
    stream.seek(0, 2)
    length = stream.tell()
    stream.seek(0)
    return stream, length


def upload_image(file_storage):
    if file_storage is None or not getattr(file_storage, "filename", ""):
        raise ValidationError("No file received")

    mimetype = getattr(file_storage, "mimetype", None) or ""
    extension = ALLOWED_IMAGE_MIME_TYPES.get(mimetype)
    if extension is None:
        raise ValidationError(f"Unsupported media type: {mimetype}")

    stream, length = _stream_length(file_storage)
    max_bytes = int(current_app.config.get("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))
    if length > max_bytes:
        raise ValidationError("File is too large")

    bucket = current_app.config["MINIO_BUCKET"]
    object_name = f"{UPLOAD_PREFIX}/{int(time.time() * 1000)}-{uuid.uuid4().hex}.{extension}"

    try:
        client = get_minio_client()
        ensure_bucket(client, bucket)
        client.put_object(
            bucket_name=bucket,
            object_name=object_name,
            data=stream,
            length=length,
            content_type=mimetype,
        )
    except Exception as e:
        logger.exception("Upload of %s to bucket %s failed", object_name, bucket)
        raise MediaStorageError() from e

    logger.info("Stored upload %s (%d bytes)", object_name, length)
    return {"object_name": object_name, "file_url": build_media_url(object_name)}
