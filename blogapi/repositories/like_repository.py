from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from blogapi.db import db
from blogapi.errors import ConflictError
from blogapi.models.like_model import CommentLike, PostLike


TARGET_POST = "post"
TARGET_COMMENT = "comment"

_LIKE_TARGETS = {
    TARGET_POST: (PostLike, "post_id"),
    TARGET_COMMENT: (CommentLike, "comment_id"),
}


def _resolve(target_type: str):
    try:
        return _LIKE_TARGETS[target_type]
    except KeyError:
        raise ValueError(f"Invalid like target: {target_type}") from None


def get_like(target_type: str, target_id: str, user_id: str):
    model, column = _resolve(target_type)
    return model.query.filter_by(
        **{column: target_id, "user_id": user_id}
    ).first()


def insert_like(target_type: str, target_id: str, user_id: str):
    model, column = _resolve(target_type)
    like = model(**{column: target_id, "user_id": user_id})
    db.session.add(like)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise ConflictError("Like already exists") from e
    return like


def delete_like(target_type: str, target_id: str, user_id: str) -> bool:
    model, column = _resolve(target_type)
    deleted = model.query.filter_by(
        **{column: target_id, "user_id": user_id}
    ).delete(synchronize_session=False)
    db.session.commit()
    return deleted > 0


def count_likes(target_type: str, target_id: str) -> int:
    model, column = _resolve(target_type)
    return model.query.filter_by(**{column: target_id}).count()


def count_by_target_ids(target_type: str, target_ids) -> dict:
    if not target_ids:
        return {}
    model, column = _resolve(target_type)
    target_column = getattr(model, column)
    rows = (
        db.session.query(target_column, func.count(model.id))
        .filter(target_column.in_(target_ids))
        .group_by(target_column)
        .all()
    )
    return {target_id: count for target_id, count in rows}


def liked_target_ids(target_type: str, target_ids, user_id: str) -> set:
    if not target_ids or not user_id:
        return set()
    model, column = _resolve(target_type)
    target_column = getattr(model, column)
    rows = (
        db.session.query(target_column)
        .filter(target_column.in_(target_ids), model.user_id == user_id)
        .all()
    )
    return {row[0] for row in rows}
