from sqlalchemy import func

from blogapi.db import db
from blogapi.models.comment_model import Comment


def create_comment(author_id, post_id, content, parent_id=None):
    comment = Comment(
        author_id=author_id,
        post_id=post_id,
        parent_id=parent_id,
        content=content,
    )
    db.session.add(comment)
    db.session.commit()
    return comment


def get_by_id(comment_id: str):
    return db.session.get(Comment, comment_id)


def get_top_level_comments(post_id: str):
    return (
        Comment.query
        .filter(Comment.post_id == post_id, Comment.parent_id.is_(None))
        .order_by(Comment.created_at.desc())
        .all()
    )


def get_replies(parent_id: str):
    return (
        Comment.query
        .filter(Comment.parent_id == parent_id)
        .order_by(Comment.created_at.desc())
        .all()
    )


def count_by_post_ids(post_ids):
    if not post_ids:
        return {}
    rows = (
        db.session.query(Comment.post_id, func.count(Comment.id))
        .filter(Comment.post_id.in_(post_ids))
        .group_by(Comment.post_id)
        .all()
    )
    return {post_id: count for post_id, count in rows}
