from flask import Blueprint, g, jsonify, request

from blogapi.errors import NotFound, ValidationError
from blogapi.routes.identity import identity_optional, identity_required
from blogapi.schemas.comment_schema import CommentResponseSchema, ThreadNodeSchema
from blogapi.schemas.post_schema import LikeToggleSchema
from blogapi.services import comment_service, like_service


comment_bp = Blueprint("comments", __name__)


@comment_bp.route("/posts/<post_id>/comments", methods=["GET"])
@identity_optional
def list_comments(post_id):
    thread = comment_service.build_thread(post_id, viewer_id=g.user_id)
    return jsonify(ThreadNodeSchema(many=True).dump(thread)), 200


@comment_bp.route("/posts/<post_id>/comments", methods=["POST"])
@identity_required()
def create_comment(post_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        comment = comment_service.add_comment(
            post_id=post_id,
            author_id=g.user_id,
            content=data.get("content"),
            parent_id=data.get("parentId"),
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFound as e:
        return jsonify({"error": str(e)}), 404

    return jsonify(CommentResponseSchema().dump(comment)), 201


@comment_bp.route("/comments/<comment_id>/like", methods=["POST"])
@identity_required(missing_status=400, message="User id required")
def toggle_comment_like(comment_id):
    try:
        result = like_service.toggle_comment_like(comment_id, g.user_id)
    except NotFound as e:
        return jsonify({"error": str(e)}), 404

    return jsonify(LikeToggleSchema().dump(result)), 200
