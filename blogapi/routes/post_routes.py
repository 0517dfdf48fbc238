from flask import Blueprint, g, jsonify, request

from blogapi.errors import Forbidden, NotFound, ValidationError
from blogapi.routes.identity import identity_optional, identity_required
from blogapi.schemas.post_schema import (
    LikeToggleSchema,
    PostDetailSchema,
    PostRecordSchema,
    PostSummarySchema,
)
from blogapi.services import like_service, post_service


post_bp = Blueprint("posts", __name__)


@post_bp.route("/posts", methods=["GET"])
def list_posts():
    category = request.args.get("category")
    posts = post_service.list_published_posts(category)
    return jsonify(PostSummarySchema(many=True).dump(posts)), 200


@post_bp.route("/posts", methods=["POST"])
@identity_required()
def create_post():
    try:
        post = post_service.create_post(g.user_id, request.get_json(silent=True))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(PostRecordSchema().dump(post)), 201


@post_bp.route("/posts/<post_id>", methods=["GET"])
@identity_optional
def get_post(post_id):
    try:
        post = post_service.get_post(post_id, viewer_id=g.user_id)
    except NotFound as e:
        return jsonify({"error": str(e)}), 404

    return jsonify(PostDetailSchema().dump(post)), 200


@post_bp.route("/posts/<post_id>", methods=["PUT"])
@identity_required()
def update_post(post_id):
    try:
        post = post_service.update_post(
            post_id, g.user_id, request.get_json(silent=True)
        )
    except NotFound as e:
        return jsonify({"error": str(e)}), 404
    except Forbidden as e:
        return jsonify({"error": str(e)}), 403
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(PostRecordSchema().dump(post)), 200


@post_bp.route("/posts/<post_id>", methods=["DELETE"])
@identity_required()
def delete_post(post_id):
    try:
        deleted_id = post_service.delete_post(post_id, g.user_id)
    except NotFound as e:
        return jsonify({"error": str(e)}), 404
    except Forbidden as e:
        return jsonify({"error": str(e)}), 403

    return jsonify({
        "success": True,
        "message": "Post deleted successfully",
        "deletedId": deleted_id,
    }), 200


@post_bp.route("/posts/<post_id>/related", methods=["GET"])
def related_posts(post_id):
    posts = post_service.get_related_posts(post_id)
    return jsonify(PostSummarySchema(many=True).dump(posts)), 200


@post_bp.route("/posts/<post_id>/like", methods=["POST"])
@identity_required(missing_status=400, message="User id required")
def toggle_like(post_id):
    try:
        result = like_service.toggle_post_like(post_id, g.user_id)
    except NotFound as e:
        return jsonify({"error": str(e)}), 404

    return jsonify(LikeToggleSchema().dump(result)), 200


@post_bp.route("/categories", methods=["GET"])
def list_categories():
    return jsonify(post_service.get_categories()), 200
