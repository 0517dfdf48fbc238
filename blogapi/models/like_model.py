from datetime import datetime

from blogapi.db import db, new_id


class PostLike(db.Model):
    __tablename__ = "post_likes"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    post_id = db.Column(
        db.String(32),
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = db.Column(
        db.String(32),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint(
            "post_id",
            "user_id",
            name="unique_post_like",
        ),
    )


class CommentLike(db.Model):
    __tablename__ = "comment_likes"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    comment_id = db.Column(
        db.String(32),
        db.ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = db.Column(
        db.String(32),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint(
            "comment_id",
            "user_id",
            name="unique_comment_like",
        ),
    )
