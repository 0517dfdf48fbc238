import os
import tempfile
import unittest
from datetime import datetime, timedelta


class TestActivityFeed(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)

        from blogapi import create_app
        from blogapi.db import db
        from blogapi.errors import ValidationError
        from blogapi.models.comment_model import Comment
        from blogapi.models.like_model import PostLike
        from blogapi.models.post_model import Post
        from blogapi.models.user_model import User
        from blogapi.services import activity_service, auth_service

        cls.app = create_app({
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{cls.db_path}",
            "JWT_SECRET_KEY": "test-secret-key-with-enough-bytes-for-hs256",
        })
        cls.client = cls.app.test_client()
        cls.db = db
        cls.Comment = Comment
        cls.PostLike = PostLike
        cls.Post = Post
        cls.User = User
        cls.activity_service = activity_service
        cls.auth_service = auth_service
        cls.ValidationError = ValidationError

    @classmethod
    def tearDownClass(cls):
        with cls.app.app_context():
            cls.db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)

    def setUp(self):
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()

    def _user(self, name):
        with self.app.app_context():
            return self.auth_service.register(
                name, f"{name}@example.com", "password123"
            ).id

    def _add(self, obj):
        with self.app.app_context():
            self.db.session.add(obj)
            self.db.session.commit()
            return obj.id

    def _post(self, author_id, created_at, title="My post", published=True):
        return self._add(self.Post(
            title=title,
            excerpt="excerpt",
            content="content",
            category="tech",
            author_id=author_id,
            published=published,
            created_at=created_at,
        ))

    def _comment(self, post_id, author_id, created_at, content="Nice post"):
        return self._add(self.Comment(
            post_id=post_id,
            author_id=author_id,
            content=content,
            created_at=created_at,
        ))

    def _like(self, post_id, user_id, created_at):
        return self._add(self.PostLike(
            post_id=post_id,
            user_id=user_id,
            created_at=created_at,
        ))

    def _feed(self, user_id):
        with self.app.app_context():
            return self.activity_service.build_activity_feed(user_id)

    def _auth_header(self, name):
        with self.app.app_context():
            token = self.auth_service.login(f"{name}@example.com", "password123")["access_token"]
        return {"Authorization": f"Bearer {token}"}

    def test_feed_merges_sources_newest_first(self):
        u1 = self._user("alice")
        u2 = self._user("bob")
        u3 = self._user("carol")
        p1 = self._post(u1, datetime(2026, 3, 1, 9, 0), title="Hello world")
        comment_id = self._comment(p1, u2, datetime(2026, 3, 1, 10, 0))
        like_id = self._like(p1, u3, datetime(2026, 3, 1, 10, 30))

        feed = self._feed(u1)

        self.assertEqual([a["kind"] for a in feed], ["like", "comment", "post"])
        like, comment, post = feed

        self.assertEqual(like["id"], f"like-{like_id}")
        self.assertEqual(like["author"], "carol")
        self.assertEqual(like["message"], "Someone liked your post")
        self.assertFalse(like["is_read"])

        self.assertEqual(comment["id"], f"comment-{comment_id}")
        self.assertEqual(comment["author"], "bob")
        self.assertEqual(comment["message"], "New comment on your post")
        self.assertEqual(comment["metadata"]["comment_content"], "Nice post")
        self.assertFalse(comment["is_read"])

        self.assertEqual(post["id"], f"post-{p1}")
        self.assertIsNone(post["author"])
        self.assertEqual(post["message"], "You published a new post")
        self.assertTrue(post["is_read"])

        for activity in feed:
            self.assertEqual(activity["post_id"], p1)
            self.assertEqual(activity["post_title"], "Hello world")

    def test_user_without_posts_has_empty_feed(self):
        u1 = self._user("alice")
        u2 = self._user("bob")
        other_post = self._post(u2, datetime(2026, 3, 1, 9, 0))
        self._comment(other_post, u1, datetime(2026, 3, 1, 10, 0))

        self.assertEqual(self._feed(u1), [])

    def test_feed_is_capped_and_sorted(self):
        u1 = self._user("alice")
        start = datetime(2026, 3, 1, 8, 0)
        post_ids = [
            self._post(u1, start + timedelta(minutes=i), title=f"post {i}")
            for i in range(15)
        ]
        likers = [self._user(f"fan{i}") for i in range(25)]
        for i, liker in enumerate(likers):
            self._like(post_ids[0], liker, start + timedelta(hours=1, minutes=i))
            self._comment(post_ids[1], liker, start + timedelta(hours=2, minutes=i))

        feed = self._feed(u1)

        self.assertEqual(len(feed), 20)
        stamps = [a["timestamp"] for a in feed]
        for newer, older in zip(stamps, stamps[1:]):
            self.assertGreaterEqual(newer, older)
        # the 20 newest are all comments, made after every like and post
        self.assertEqual({a["kind"] for a in feed}, {"comment"})

    def test_post_source_is_capped_at_ten(self):
        u1 = self._user("alice")
        start = datetime(2026, 3, 1, 8, 0)
        for i in range(15):
            self._post(u1, start + timedelta(minutes=i), title=f"post {i}")

        feed = self._feed(u1)

        self.assertEqual(len(feed), 10)
        self.assertEqual(feed[0]["post_title"], "post 14")
        self.assertEqual(feed[-1]["post_title"], "post 5")

    def test_unpublished_posts_are_not_activities_but_their_comments_are(self):
        u1 = self._user("alice")
        u2 = self._user("bob")
        draft = self._post(u1, datetime(2026, 3, 1, 9, 0), published=False)
        self._comment(draft, u2, datetime(2026, 3, 1, 10, 0))

        feed = self._feed(u1)

        self.assertEqual([a["kind"] for a in feed], ["comment"])

    def test_long_comment_is_truncated(self):
        u1 = self._user("alice")
        u2 = self._user("bob")
        p1 = self._post(u1, datetime(2026, 3, 1, 9, 0))
        self._comment(p1, u2, datetime(2026, 3, 1, 10, 0), content="x" * 150)
        self._comment(p1, u2, datetime(2026, 3, 1, 11, 0), content="y" * 100)

        feed = self._feed(u1)

        self.assertEqual(feed[0]["metadata"]["comment_content"], "y" * 100)
        self.assertEqual(feed[1]["metadata"]["comment_content"], "x" * 100 + "...")

    def test_ties_keep_source_order(self):
        u1 = self._user("alice")
        u2 = self._user("bob")
        same_time = datetime(2026, 3, 1, 12, 0)
        p1 = self._post(u1, same_time)
        self._like(p1, u2, same_time)
        self._comment(p1, u2, same_time)

        feed = self._feed(u1)

        self.assertEqual([a["kind"] for a in feed], ["comment", "like", "post"])

    def test_invalid_user_id_is_rejected(self):
        for bad in (None, "", "   ", "x" * 65, 42):
            with self.assertRaises(self.ValidationError):
                self._feed(bad)

    def test_activities_route(self):
        u1 = self._user("alice")
        u2 = self._user("bob")
        p1 = self._post(u1, datetime(2026, 3, 1, 9, 0), title="Hello world")
        self._comment(p1, u2, datetime(2026, 3, 1, 10, 0))

        response = self.client.get(
            f"/api/users/{u1}/activities", headers=self._auth_header("alice")
        )
        self.assertEqual(response.status_code, 200)
        body = response.get_json()
        self.assertEqual([a["type"] for a in body], ["comment", "post"])
        self.assertEqual(body[0]["postTitle"], "Hello world")
        self.assertEqual(body[0]["postId"], p1)
        self.assertFalse(body[0]["isRead"])
        self.assertEqual(body[0]["metadata"]["commentContent"], "Nice post")
        self.assertTrue(body[1]["isRead"])
        self.assertEqual(body[1]["metadata"], {})
        self.assertTrue(body[0]["date"].startswith("2026-03-01T10:00"))

        me = self.client.get("/api/users/me/activities", headers=self._auth_header("alice"))
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.get_json(), body)

    def test_activities_route_requires_identity(self):
        u1 = self._user("alice")
        self._user("bob")

        anonymous = self.client.get(f"/api/users/{u1}/activities")
        self.assertEqual(anonymous.status_code, 400)
        self.assertEqual(anonymous.get_json()["error"], "Unable to determine user ID")

        other = self.client.get(
            f"/api/users/{u1}/activities", headers=self._auth_header("bob")
        )
        self.assertEqual(other.status_code, 403)


if __name__ == "__main__":
    unittest.main()
