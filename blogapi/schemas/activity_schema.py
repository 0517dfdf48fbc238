from blogapi.extensions.extensions import ma


class ActivityMetadataSchema(ma.Schema):
    comment_content = ma.String(data_key="commentContent")
    author_avatar = ma.String(data_key="authorAvatar", allow_none=True)
    liker_avatar = ma.String(data_key="likerAvatar", allow_none=True)


class ActivitySchema(ma.Schema):
    id = ma.String()
    kind = ma.String(data_key="type")
    message = ma.String()
    post_title = ma.String(data_key="postTitle")
    post_id = ma.String(data_key="postId")
    author = ma.String(allow_none=True)
    timestamp = ma.DateTime(data_key="date")
    is_read = ma.Boolean(data_key="isRead")
    metadata = ma.Nested(ActivityMetadataSchema)
