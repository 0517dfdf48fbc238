import logging
from concurrent.futures import ThreadPoolExecutor

from flask import current_app

from blogapi.errors import NotFound, ValidationError
from blogapi.repositories import (
    comment_repository,
    like_repository,
    post_repository,
    user_repository,
)


logger = logging.getLogger(__name__)


def add_comment(post_id, author_id, content, parent_id=None):
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("Comment content is required")

    if parent_id is not None and not isinstance(parent_id, str):
        raise ValidationError("Invalid parent comment")

    if not post_repository.exists(post_id):
        raise NotFound("Post not found")

    if parent_id:
        parent = comment_repository.get_by_id(parent_id)
        if not parent or parent.post_id != post_id:
            raise ValidationError("Invalid parent comment")

        # threads are two levels deep; a reply to a reply joins its thread root
        if parent.parent_id:
            parent_id = parent.parent_id

    comment = comment_repository.create_comment(
        author_id=author_id,
        post_id=post_id,
        content=content.strip(),
        parent_id=parent_id or None,
    )
    logger.info(
        "Comment %s added to post %s by %s (parent=%s)",
        comment.id, post_id, author_id, comment.parent_id,
    )

    users = user_repository.get_by_ids({author_id})
    return serialize_comment(comment, users)


def build_thread(post_id, viewer_id=None):
    """Top-level comments of a post, newest first, each with its direct
    replies (also newest first).  Unknown posts yield an empty list."""
    top_level = comment_repository.get_top_level_comments(post_id)
    if not top_level:
        return []

    replies_by_parent = _fetch_replies([comment.id for comment in top_level])

    every_comment = list(top_level)
    for replies in replies_by_parent:
        every_comment.extend(replies)

    comment_ids = [comment.id for comment in every_comment]
    users = user_repository.get_by_ids({c.author_id for c in every_comment})
    like_counts = like_repository.count_by_target_ids(
        like_repository.TARGET_COMMENT, comment_ids
    )
    liked_ids = like_repository.liked_target_ids(
        like_repository.TARGET_COMMENT, comment_ids, viewer_id
    )

    thread = []
    for comment, replies in zip(top_level, replies_by_parent):
        node = serialize_comment(comment, users, like_counts, liked_ids)
        node["replies"] = [
            serialize_comment(reply, users, like_counts, liked_ids)
            for reply in replies
        ]
        thread.append(node)

    return thread


def _fetch_replies(parent_ids):
    workers = int(current_app.config.get("COMMENT_REPLY_FETCH_WORKERS", 1))
    if workers <= 1 or len(parent_ids) <= 1:
        return [comment_repository.get_replies(parent_id) for parent_id in parent_ids]

    app = current_app._get_current_object()

    def fetch(parent_id):
        # each worker gets its own app context, hence its own session
        with app.app_context():
            return comment_repository.get_replies(parent_id)

    with ThreadPoolExecutor(max_workers=min(workers, len(parent_ids))) as pool:
        return list(pool.map(fetch, parent_ids))


def serialize_comment(comment, users, like_counts=None, liked_ids=None):
    like_counts = like_counts or {}
    liked_ids = liked_ids or set()
    author = users.get(comment.author_id)

    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "content": comment.content,
        "created_at": comment.created_at,
        "author": {
            "id": comment.author_id,
            "name": author.name if author else None,
            "avatar": author.image if author else None,
        },
        "likes": like_counts.get(comment.id, 0),
        "is_liked": comment.id in liked_ids,
        "replies": [],
    }
