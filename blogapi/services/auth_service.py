import logging
import re

from flask_jwt_extended import create_access_token, create_refresh_token
from werkzeug.security import check_password_hash, generate_password_hash

from blogapi.errors import Unauthorized, ValidationError
from blogapi.repositories import user_repository


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


def _require_non_empty_string(value):
    return isinstance(value, str) and value.strip()


def normalize_email(email):
    if not _require_non_empty_string(email):
        raise ValidationError("Email is required")
    email = email.strip().lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    return email


def register(name, email, password):
    if (
        not _require_non_empty_string(name)
        or not _require_non_empty_string(email)
        or not _require_non_empty_string(password)
    ):
        raise ValidationError("Missing fields")

    email = normalize_email(email)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    if user_repository.get_by_email(email):
        raise ValidationError("Email already registered")

    user = user_repository.create_user(
        name=name.strip(),
        email=email,
        password_hash=generate_password_hash(password),
    )
    logger.info("Registered user %s", user.id)
    return user


def login(email, password):
    if not _require_non_empty_string(email) or not _require_non_empty_string(password):
        raise Unauthorized("Invalid credentials")

    user = user_repository.get_by_email(email.strip().lower())
    if not user or not check_password_hash(user.password_hash, password):
        raise Unauthorized("Invalid credentials")

    return {
        "access_token": create_access_token(identity=user.id),
        "refresh_token": create_refresh_token(identity=user.id),
        "user": user.to_dict(),
    }


def refresh_access_token(user_id):
    return {
        "access_token": create_access_token(identity=user_id)
    }
