import logging
import re

from flask import current_app

from blogapi.errors import Forbidden, NotFound, ValidationError
from blogapi.models.post_model import DEFAULT_READ_TIME
from blogapi.repositories import (
    comment_repository,
    like_repository,
    post_repository,
    user_repository,
)


logger = logging.getLogger(__name__)

CATEGORIES = [
    {"value": "tech", "label": "Technology",
     "description": "Programming, AI, software development"},
    {"value": "lifestyle", "label": "Lifestyle",
     "description": "Health, wellness, daily life"},
    {"value": "work", "label": "Work",
     "description": "Career, productivity, business"},
    {"value": "travel", "label": "Travel",
     "description": "Adventures, destinations, culture"},
    {"value": "food", "label": "Food",
     "description": "Recipes, restaurants, cooking"},
    {"value": "personal", "label": "Personal",
     "description": "Thoughts, experiences, reflections"},
]

EXCERPT_LENGTH = 160
RELATED_POSTS_LIMIT = 3

_TAG_RE = re.compile(r"<[^>]*>")


def normalize_category(category):
    if not isinstance(category, str) or not category.strip():
        return None

    wanted = category.strip().lower()
    for item in CATEGORIES:
        if wanted in (item["value"], item["label"].lower()):
            return item["value"]
    return None


def _build_excerpt(content: str) -> str:
    return _TAG_RE.sub("", content)[:EXCERPT_LENGTH] + "..."


def _validate_post_fields(data):
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON body")

    title = data.get("title")
    content = data.get("content")
    category = data.get("category")

    if (
        not isinstance(title, str) or not title.strip()
        or not isinstance(content, str) or not content.strip()
        or not category
    ):
        raise ValidationError("Title, content, and category are required")

    normalized = normalize_category(category)
    if normalized is None:
        raise ValidationError(f"Unknown category: {category}")

    excerpt = data.get("excerpt")
    if not isinstance(excerpt, str) or not excerpt.strip():
        excerpt = _build_excerpt(content)

    read_time = data.get("readTime")
    if not isinstance(read_time, str) or not read_time.strip():
        read_time = DEFAULT_READ_TIME

    return {
        "title": title.strip(),
        "content": content,
        "excerpt": excerpt.strip(),
        "category": normalized,
        "image": data.get("image") or None,
        "read_time": read_time.strip(),
        "published": data.get("status") == "published",
    }


def _get_owned_post(post_id, user_id):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise NotFound("Post not found")
    if post.author_id != user_id:
        raise Forbidden("You can only modify your own posts")
    return post


def create_post(author_id, data):
    fields = _validate_post_fields(data)
    post = post_repository.create_post(author_id=author_id, **fields)
    logger.info("Post %s created by %s (published=%s)", post.id, author_id, post.published)
    return post


def update_post(post_id, user_id, data):
    post = _get_owned_post(post_id, user_id)
    fields = _validate_post_fields(data)
    post = post_repository.update_post(post, **fields)
    logger.info("Post %s updated by %s", post_id, user_id)
    return post


def delete_post(post_id, user_id):
    post = _get_owned_post(post_id, user_id)
    post_repository.delete_post(post)
    logger.info("Post %s deleted by %s", post_id, user_id)
    return post_id


def _stats_for(post_ids):
    comment_counts = comment_repository.count_by_post_ids(post_ids)
    like_counts = like_repository.count_by_target_ids(
        like_repository.TARGET_POST, post_ids
    )
    return comment_counts, like_counts


def _serialize_summary(post, author_name, comment_counts, like_counts):
    return {
        "id": post.id,
        "title": post.title,
        "excerpt": post.excerpt,
        "category": post.category,
        "image": post.image,
        "read_time": post.read_time,
        "created_at": post.created_at,
        "author": author_name,
        "comments": comment_counts.get(post.id, 0),
        "likes": like_counts.get(post.id, 0),
    }


def list_published_posts(category=None):
    if category is not None:
        category = normalize_category(category)
        if category is None:
            return []

    limit = int(current_app.config.get("POSTS_PAGE_LIMIT", 50))
    rows = post_repository.get_published_posts(limit, category)
    comment_counts, like_counts = _stats_for([post.id for post, _ in rows])

    return [
        _serialize_summary(post, author_name, comment_counts, like_counts)
        for post, author_name in rows
    ]


def get_post(post_id, viewer_id=None):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise NotFound("Post not found")

    author = user_repository.get_by_id(post.author_id)
    liked = like_repository.liked_target_ids(
        like_repository.TARGET_POST, [post.id], viewer_id
    )

    return {
        "id": post.id,
        "title": post.title,
        "excerpt": post.excerpt,
        "content": post.content,
        "category": post.category,
        "image": post.image,
        "read_time": post.read_time,
        "published": post.published,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "author": {
            "id": post.author_id,
            "name": author.name if author else None,
            "avatar": author.image if author else None,
        },
        "likes": like_repository.count_likes(like_repository.TARGET_POST, post.id),
        "is_liked": post.id in liked,
    }


def get_related_posts(post_id):
    post = post_repository.get_by_id(post_id)
    if not post:
        return []

    rows = post_repository.get_related_posts(post, RELATED_POSTS_LIMIT)
    comment_counts, like_counts = _stats_for([related.id for related, _ in rows])
    return [
        _serialize_summary(related, author_name, comment_counts, like_counts)
        for related, author_name in rows
    ]


def get_author_posts(author_id):
    """Every post of ``author_id``, drafts included, for the dashboard."""
    posts = post_repository.get_posts_by_author(author_id)
    comment_counts, like_counts = _stats_for([post.id for post in posts])

    result = []
    for post in posts:
        item = _serialize_summary(post, None, comment_counts, like_counts)
        item["published"] = post.published
        item["status"] = "Published" if post.published else "Draft"
        result.append(item)
    return result


def get_categories():
    counts = post_repository.count_published_by_category()
    return [
        dict(item, posts=counts.get(item["value"], 0))
        for item in CATEGORIES
    ]
