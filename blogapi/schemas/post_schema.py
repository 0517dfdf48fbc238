from blogapi.extensions.extensions import ma
from blogapi.schemas.comment_schema import AuthorSchema


class PostSummarySchema(ma.Schema):
    id = ma.String()
    title = ma.String()
    excerpt = ma.String()
    category = ma.String()
    image = ma.String(allow_none=True)
    read_time = ma.String(data_key="readTime")
    created_at = ma.DateTime(data_key="date")
    author = ma.String(allow_none=True)
    comments = ma.Integer()
    likes = ma.Integer()


class DashboardPostSchema(PostSummarySchema):
    published = ma.Boolean()
    status = ma.String()


class PostDetailSchema(ma.Schema):
    id = ma.String()
    title = ma.String()
    excerpt = ma.String()
    content = ma.String()
    category = ma.String()
    image = ma.String(allow_none=True)
    read_time = ma.String(data_key="readTime")
    published = ma.Boolean()
    created_at = ma.DateTime(data_key="date")
    updated_at = ma.DateTime(data_key="updatedAt")
    author = ma.Nested(AuthorSchema)
    likes = ma.Integer()
    is_liked = ma.Boolean(data_key="isLiked")


class PostRecordSchema(ma.Schema):
    """Raw post row, returned after create/update."""

    id = ma.String()
    title = ma.String()
    excerpt = ma.String()
    content = ma.String()
    category = ma.String()
    author_id = ma.String(data_key="authorId")
    image = ma.String(allow_none=True)
    read_time = ma.String(data_key="readTime")
    published = ma.Boolean()
    created_at = ma.DateTime(data_key="createdAt")
    updated_at = ma.DateTime(data_key="updatedAt")


class LikeToggleSchema(ma.Schema):
    success = ma.Constant(True)
    is_liked = ma.Boolean(data_key="isLiked")
    total_likes = ma.Integer(data_key="totalLikes")
