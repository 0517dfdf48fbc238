from datetime import datetime

from blogapi.db import db, new_id


class Comment(db.Model):
    __tablename__ = "comments"

    id = db.Column(db.String(32), primary_key=True, default=new_id)

    post_id = db.Column(
        db.String(32),
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    author_id = db.Column(
        db.String(32),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # null for top-level comments
    parent_id = db.Column(
        db.String(32),
        db.ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    content = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    replies = db.relationship(
        "Comment",
        backref=db.backref("parent", remote_side=[id]),
        cascade="all, delete-orphan",
    )

    likes = db.relationship(
        "CommentLike",
        backref="comment",
        lazy="select",
        cascade="all, delete-orphan",
    )
