from flask import Blueprint, g, jsonify, request

from blogapi.errors import ConflictError, NotFound, ValidationError
from blogapi.routes.identity import identity_required
from blogapi.schemas.activity_schema import ActivitySchema
from blogapi.schemas.post_schema import DashboardPostSchema
from blogapi.services import activity_service, post_service, profile_service


user_bp = Blueprint("users", __name__)

_NO_IDENTITY = "Unable to determine user ID"


def _activities_response(user_id):
    try:
        activities = activity_service.build_activity_feed(user_id)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(ActivitySchema(many=True).dump(activities)), 200


@user_bp.route("/users/me/activities", methods=["GET"])
@identity_required(missing_status=400, message=_NO_IDENTITY)
def my_activities():
    return _activities_response(g.user_id)


@user_bp.route("/users/<user_id>/activities", methods=["GET"])
@identity_required(missing_status=400, message=_NO_IDENTITY)
def user_activities(user_id):
    if user_id != g.user_id:
        return jsonify({"error": "You can only view your own activity"}), 403
    return _activities_response(user_id)


@user_bp.route("/users/me/posts", methods=["GET"])
@identity_required()
def my_posts():
    posts = post_service.get_author_posts(g.user_id)
    return jsonify(DashboardPostSchema(many=True).dump(posts)), 200


@user_bp.route("/users/me/profile", methods=["GET"])
@identity_required()
def get_my_profile():
    try:
        return jsonify(profile_service.get_profile(g.user_id)), 200
    except NotFound as e:
        return jsonify({"error": str(e)}), 404


@user_bp.route("/users/me/profile", methods=["PUT"])
@identity_required()
def update_my_profile():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        user = profile_service.update_profile(
            g.user_id,
            name=data.get("name"),
            email=data.get("email"),
            image=data.get("image"),
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409
    except NotFound as e:
        return jsonify({"error": str(e)}), 404

    return jsonify({
        "success": True,
        "message": "Profile updated successfully",
        "user": user,
    }), 200
