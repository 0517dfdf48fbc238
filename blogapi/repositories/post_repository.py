from sqlalchemy import func

from blogapi.db import db
from blogapi.models.post_model import Post
from blogapi.models.user_model import User


def create_post(author_id, title, excerpt, content, category, image, read_time, published):
    post = Post(
        author_id=author_id,
        title=title,
        excerpt=excerpt,
        content=content,
        category=category,
        image=image,
        read_time=read_time,
        published=published,
    )
    db.session.add(post)
    db.session.commit()
    return post


def get_by_id(post_id: str):
    return db.session.get(Post, post_id)


def exists(post_id: str) -> bool:
    return (
        db.session.query(Post.id).filter(Post.id == post_id).first()
        is not None
    )


def update_post(post, **fields):
    for name, value in fields.items():
        setattr(post, name, value)
    db.session.commit()
    return post


def delete_post(post):
    db.session.delete(post)
    db.session.commit()


def get_published_posts(limit: int, category=None):
    query = (
        db.session.query(Post, User.name)
        .outerjoin(User, User.id == Post.author_id)
        .filter(Post.published.is_(True))
    )
    if category:
        query = query.filter(Post.category == category)

    return query.order_by(Post.created_at.desc()).limit(limit).all()


def get_posts_by_author(author_id: str):
    return (
        Post.query
        .filter(Post.author_id == author_id)
        .order_by(Post.created_at.desc())
        .all()
    )


def get_related_posts(post, limit: int = 3):
    return (
        db.session.query(Post, User.name)
        .outerjoin(User, User.id == Post.author_id)
        .filter(
            Post.category == post.category,
            Post.id != post.id,
            Post.published.is_(True),
        )
        .order_by(Post.created_at.desc())
        .limit(limit)
        .all()
    )


def count_published_by_category():
    rows = (
        db.session.query(Post.category, func.count(Post.id))
        .filter(Post.published.is_(True))
        .group_by(Post.category)
        .all()
    )
    return {category: count for category, count in rows}
