"""Bounded reads behind the dashboard activity feed.

Each source is fetched on its own; the rows share no join key, so merging
happens in the service layer.
"""
from blogapi.db import db
from blogapi.models.comment_model import Comment
from blogapi.models.like_model import PostLike
from blogapi.models.post_model import Post
from blogapi.models.user_model import User


def get_comments_on_author_posts(author_id: str, limit: int):
    return (
        db.session.query(
            Comment.id,
            Comment.content,
            Comment.created_at,
            Post.id.label("post_id"),
            Post.title.label("post_title"),
            User.name.label("author_name"),
            User.image.label("author_avatar"),
        )
        .join(Post, Comment.post_id == Post.id)
        .outerjoin(User, Comment.author_id == User.id)
        .filter(Post.author_id == author_id)
        .order_by(Comment.created_at.desc())
        .limit(limit)
        .all()
    )


def get_likes_on_author_posts(author_id: str, limit: int):
    return (
        db.session.query(
            PostLike.id,
            PostLike.created_at,
            Post.id.label("post_id"),
            Post.title.label("post_title"),
            User.name.label("liker_name"),
            User.image.label("liker_avatar"),
        )
        .join(Post, PostLike.post_id == Post.id)
        .outerjoin(User, PostLike.user_id == User.id)
        .filter(Post.author_id == author_id)
        .order_by(PostLike.created_at.desc())
        .limit(limit)
        .all()
    )


def get_recent_published_posts(author_id: str, limit: int):
    return (
        db.session.query(Post.id, Post.title, Post.created_at)
        .filter(Post.author_id == author_id, Post.published.is_(True))
        .order_by(Post.created_at.desc())
        .limit(limit)
        .all()
    )
