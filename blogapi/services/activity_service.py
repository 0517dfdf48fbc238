import logging

from flask import current_app

from blogapi.errors import ValidationError
from blogapi.repositories import activity_repository


logger = logging.getLogger(__name__)

KIND_COMMENT = "comment"
KIND_LIKE = "like"
KIND_POST = "post"

COMMENT_SOURCE_LIMIT = 20
LIKE_SOURCE_LIMIT = 20
POST_SOURCE_LIMIT = 10

EXCERPT_LENGTH = 100
MAX_USER_ID_LENGTH = 64


def _truncate(text: str, length: int = EXCERPT_LENGTH) -> str:
    if len(text) <= length:
        return text
    return text[:length] + "..."


def _comment_activity(row):
    return {
        "id": f"{KIND_COMMENT}-{row.id}",
        "kind": KIND_COMMENT,
        "message": "New comment on your post",
        "post_title": row.post_title,
        "post_id": row.post_id,
        "author": row.author_name,
        "timestamp": row.created_at,
        "is_read": False,
        "metadata": {
            "comment_content": _truncate(row.content),
            "author_avatar": row.author_avatar,
        },
    }


def _like_activity(row):
    return {
        "id": f"{KIND_LIKE}-{row.id}",
        "kind": KIND_LIKE,
        "message": "Someone liked your post",
        "post_title": row.post_title,
        "post_id": row.post_id,
        "author": row.liker_name,
        "timestamp": row.created_at,
        "is_read": False,
        "metadata": {
            "liker_avatar": row.liker_avatar,
        },
    }


def _post_activity(row):
    return {
        "id": f"{KIND_POST}-{row.id}",
        "kind": KIND_POST,
        "message": "You published a new post",
        "post_title": row.title,
        "post_id": row.id,
        "author": None,
        "timestamp": row.created_at,
        "is_read": True,
        "metadata": {},
    }


def build_activity_feed(user_id):
    """Merge comments received, likes received and posts published by
    ``user_id`` into one list, newest first.

    Each source is capped before the merge, then the combined list is
    sorted (ties keep comment, like, post order) and cut to the feed limit.
    """
    if (
        not isinstance(user_id, str)
        or not user_id.strip()
        or len(user_id) > MAX_USER_ID_LENGTH
    ):
        raise ValidationError("A valid user id is required")

    feed_limit = int(current_app.config.get("ACTIVITY_FEED_LIMIT", 20))

    activities = []
    activities.extend(
        _comment_activity(row)
        for row in activity_repository.get_comments_on_author_posts(
            user_id, COMMENT_SOURCE_LIMIT
        )
    )
    activities.extend(
        _like_activity(row)
        for row in activity_repository.get_likes_on_author_posts(
            user_id, LIKE_SOURCE_LIMIT
        )
    )
    activities.extend(
        _post_activity(row)
        for row in activity_repository.get_recent_published_posts(
            user_id, POST_SOURCE_LIMIT
        )
    )

    # sorted() is stable, also with reverse=True
    activities = sorted(activities, key=lambda a: a["timestamp"], reverse=True)

    logger.debug("Activity feed for %s: %d entries", user_id, len(activities))
    return activities[:feed_limit]
