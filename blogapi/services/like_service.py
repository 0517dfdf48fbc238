"""Like/unlike toggles for posts and comments.

A toggle is check-then-act: look for the caller's like row, delete it or
insert one.  Two concurrent toggles can both see "no like" and both insert;
the unique constraint rejects the loser, which then reports the state the
winner produced instead of failing.
"""
import logging

from blogapi.errors import ConflictError, NotFound
from blogapi.repositories import comment_repository, like_repository, post_repository


logger = logging.getLogger(__name__)


def toggle_post_like(post_id: str, user_id: str):
    if not post_repository.exists(post_id):
        raise NotFound("Post not found")

    return _toggle(like_repository.TARGET_POST, post_id, user_id)


def toggle_comment_like(comment_id: str, user_id: str):
    if comment_repository.get_by_id(comment_id) is None:
        raise NotFound("Comment not found")

    return _toggle(like_repository.TARGET_COMMENT, comment_id, user_id)


def _toggle(target_type: str, target_id: str, user_id: str):
    existing = like_repository.get_like(target_type, target_id, user_id)

    if existing:
        like_repository.delete_like(target_type, target_id, user_id)
        is_liked = False
    else:
        try:
            like_repository.insert_like(target_type, target_id, user_id)
            is_liked = True
        except ConflictError:
            logger.warning(
                "Concurrent like on %s %s by %s; re-reading state",
                target_type, target_id, user_id,
            )
            is_liked = (
                like_repository.get_like(target_type, target_id, user_id)
                is not None
            )

    total = like_repository.count_likes(target_type, target_id)
    logger.info(
        "%s %s %s by %s (total=%s)",
        target_type.capitalize(), target_id,
        "liked" if is_liked else "unliked", user_id, total,
    )
    return {"is_liked": is_liked, "total_likes": total}
