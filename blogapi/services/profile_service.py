import logging

from blogapi.errors import ConflictError, NotFound, ValidationError
from blogapi.repositories import user_repository
from blogapi.services.auth_service import normalize_email


logger = logging.getLogger(__name__)


def get_profile(user_id: str):
    user = user_repository.get_by_id(user_id)
    if not user:
        raise NotFound("User not found")
    return user.to_dict()


def update_profile(user_id: str, name=None, email=None, image=None):
    user = user_repository.get_by_id(user_id)
    if not user:
        raise NotFound("User not found")

    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email is required")
    email = normalize_email(email)

    if image is not None and not isinstance(image, str):
        raise ValidationError("Image must be a URL string")

    existing = user_repository.get_by_email(email)
    if existing and existing.id != user.id:
        raise ConflictError("Email is already taken")

    user = user_repository.update_user(
        user,
        name=name.strip(),
        email=email,
        image=image or None,
    )
    logger.info("Profile updated for %s", user_id)
    return user.to_dict()
