from blogapi.extensions.extensions import ma


class AuthorSchema(ma.Schema):
    id = ma.String()
    name = ma.String(allow_none=True)
    avatar = ma.String(allow_none=True)


class CommentResponseSchema(ma.Schema):
    id = ma.String()
    post_id = ma.String(data_key="postId")
    parent_id = ma.String(data_key="parentId", allow_none=True)
    content = ma.String()
    created_at = ma.DateTime(data_key="createdAt")
    author = ma.Nested(AuthorSchema)
    likes = ma.Integer()
    is_liked = ma.Boolean(data_key="isLiked")


class ThreadNodeSchema(CommentResponseSchema):
    replies = ma.List(ma.Nested(CommentResponseSchema))
