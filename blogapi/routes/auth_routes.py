from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from blogapi.errors import Unauthorized, ValidationError
from blogapi.repositories import user_repository
from blogapi.services import auth_service
from blogapi.services.identity_service import resolve_user_id


auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        user = auth_service.register(
            data.get("name"),
            data.get("email"),
            data.get("password"),
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({"message": "User registered", "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        tokens = auth_service.login(
            data.get("email"),
            data.get("password"),
        )
    except Unauthorized as e:
        return jsonify({"error": str(e)}), 401

    return jsonify(tokens), 200


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh_token():
    user_id = get_jwt_identity()
    return jsonify(auth_service.refresh_access_token(user_id)), 200


@auth_bp.route("/session", methods=["GET"])
def session():
    user_id = resolve_user_id()
    if not user_id:
        return jsonify({"user": None}), 200

    user = user_repository.get_by_id(user_id)
    return jsonify({"user": user.to_dict()}), 200
