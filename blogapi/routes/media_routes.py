import logging

from flask import Blueprint, Response, current_app, jsonify, request, stream_with_context
from minio.error import S3Error

from blogapi.errors import ValidationError
from blogapi.extensions.minio_client import get_minio_client
from blogapi.routes.identity import identity_required
from blogapi.services import upload_service
from blogapi.services.upload_service import MediaStorageError


logger = logging.getLogger(__name__)

media_bp = Blueprint("media", __name__)

_MISSING_OBJECT_CODES = {"NoSuchKey", "NoSuchBucket", "NoSuchObject"}


@media_bp.route("/uploads", methods=["POST"])
@identity_required()
def upload():
    try:
        result = upload_service.upload_image(request.files.get("file"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except MediaStorageError as e:
        return jsonify({"error": str(e)}), 503

    return jsonify({"success": True, "file_url": result["file_url"]}), 201


def _quoted_etag(value):
    if not value:
        return None
    value = str(value).strip().strip('"')
    return f'"{value}"' if value else None


@media_bp.route("/media/<path:object_name>", methods=["GET"])
def get_media(object_name: str):
    if not object_name.startswith(f"{upload_service.UPLOAD_PREFIX}/"):
        return jsonify({"error": "Media not found"}), 404

    bucket = current_app.config["MINIO_BUCKET"]
    client = get_minio_client()

    try:
        stat = client.stat_object(bucket_name=bucket, object_name=object_name)
        etag = _quoted_etag(getattr(stat, "etag", None))
        headers = {
            "Cache-Control": (
                f"public, max-age={current_app.config['MEDIA_CACHE_MAX_AGE_SECONDS']}"
            ),
            "Content-Type": getattr(stat, "content_type", None) or "application/octet-stream",
        }
        if etag:
            headers["ETag"] = etag
            if etag.strip('"') in {
                tag.strip().strip('"')
                for tag in request.headers.get("If-None-Match", "").split(",")
            }:
                return Response(status=304, headers=headers)

        minio_response = client.get_object(bucket_name=bucket, object_name=object_name)
    except S3Error as e:
        if e.code in _MISSING_OBJECT_CODES:
            return jsonify({"error": "Media not found"}), 404
        logger.exception("Media lookup failed for %s", object_name)
        return jsonify({"error": "Media unavailable"}), 503
    except Exception:
        logger.exception("Media storage unreachable for %s", object_name)
        return jsonify({"error": "Media unavailable"}), 503

    chunk_size = max(int(current_app.config["MEDIA_STREAM_CHUNK_SIZE"]), 1024)

    def _stream():
        try:
            for chunk in minio_response.stream(chunk_size):
                yield chunk
        finally:
            minio_response.close()
            minio_response.release_conn()

    return Response(
        stream_with_context(_stream()),
        status=200,
        headers=headers,
        direct_passthrough=True,
    )
