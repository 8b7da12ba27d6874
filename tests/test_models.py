"""
Tests for django-inkwell models.
"""
import pytest

from inkwell.models import (
    Category,
    Comment,
    Post,
    Tag,
    User,
    build_thread,
)


@pytest.fixture
def comment(db, post, reader):
    """Create a top-level comment."""
    return Comment.objects.create(
        post=post,
        author=reader,
        content="Great post!",
    )


class TestUser:
    """Tests for User model."""

    def test_create_user(self, db):
        """Test creating a user with defaults."""
        user = User.objects.create_user(
            email="someone@Example.com",
            password="secret123",
            name="Someone",
        )
        assert user.email == "someone@example.com"
        assert user.role == "author"
        assert not user.is_admin
        assert user.avatar == "default-avatar.jpg"
        assert user.check_password("secret123")

    def test_create_superuser_is_admin(self, db):
        """Test superusers get the admin role."""
        user = User.objects.create_superuser(
            email="root@example.com",
            password="secret123",
            name="Root",
        )
        assert user.role == "admin"
        assert user.is_admin
        assert user.is_staff


class TestCategory:
    """Tests for Category model."""

    def test_create_category(self, db):
        """Test creating a category."""
        cat = Category.objects.create(name="My Category")
        assert cat.name == "My Category"
        assert cat.slug == "my-category"

    def test_slug_collision(self, db):
        """Test names that slugify alike get distinct slugs."""
        first = Category.objects.create(name="Web Dev")
        second = Category.objects.create(name="Web-Dev")
        assert first.slug == "web-dev"
        assert second.slug == "web-dev-1"

    def test_resolve_reuses_existing(self, db):
        """Test resolving names is case-insensitive and creates missing rows."""
        existing = Category.objects.create(name="Python")
        rows = Category.objects.resolve(["python", "Django"])

        assert rows[0] == existing
        assert rows[1].name == "Django"
        assert Category.objects.count() == 2


class TestTag:
    """Tests for Tag model."""

    def test_create_tag(self, db):
        """Test creating a tag."""
        tag = Tag.objects.create(name="Django")
        assert tag.name == "Django"
        assert tag.slug == "django"

    def test_tag_post_count(self, db, post):
        """Test tag post count property."""
        tag = Tag.objects.create(name="test-tag")
        post.tags.add(tag)
        assert tag.post_count == 1


class TestPost:
    """Tests for Post model."""

    def test_post_defaults(self, db, post):
        """Test a new post starts with placeholders and zeroed counters."""
        assert post.cover_image == "default-blog.jpg"
        assert post.status == Post.STATUS_PUBLISHED
        assert post.view_count == 0
        assert post.reaction_counts == {"likes": 0, "hearts": 0, "claps": 0}
        assert post.category_names == ["General"]

    def test_reaction_counts_zero_filled(self, db, author):
        """Test missing counters read as zero."""
        post = Post.objects.create(title="Bare", content="x", author=author)
        assert post.reactions == {}
        assert post.reaction_counts == {"likes": 0, "hearts": 0, "claps": 0}

    def test_post_preview(self, db, author):
        """Test preview strips markup and truncates."""
        post = Post.objects.create(
            title="Test",
            content="<p>" + "x" * 500 + "</p>",
            author=author,
        )
        assert len(post.preview) == 203  # 200 + "..."
        assert not post.preview.startswith("<p>")

    def test_preview_prefers_summary(self, db, author):
        post = Post.objects.create(
            title="Test", content="long body", summary="Short", author=author
        )
        assert post.preview == "Short"


class TestComment:
    """Tests for Comment model."""

    def test_create_comment(self, db, comment, post):
        """Test creating a comment."""
        assert comment.content == "Great post!"
        assert comment.post == post
        assert not comment.is_reply
        assert comment.reaction_counts == {"likes": 0}

    def test_threaded_comments(self, db, post, reader, comment):
        """Test nested comment replies."""
        reply = Comment.objects.create(
            post=post,
            author=reader,
            content="Reply",
            parent=comment,
        )
        nested = Comment.objects.create(
            post=post,
            author=reader,
            content="Reply to reply",
            parent=reply,
        )
        assert reply.is_reply
        assert reply.thread_depth == 1
        assert nested.thread_depth == 2
        assert comment.replies.count() == 1

    def test_descendant_ids(self, db, post, reader, comment):
        """Test collecting every reply below a comment."""
        reply = Comment.objects.create(post=post, author=reader, content="a", parent=comment)
        sibling = Comment.objects.create(post=post, author=reader, content="b", parent=comment)
        nested = Comment.objects.create(post=post, author=reader, content="c", parent=reply)
        Comment.objects.create(post=post, author=reader, content="unrelated")

        assert sorted(comment.descendant_ids()) == sorted([reply.pk, sibling.pk, nested.pk])
        assert reply.descendant_ids() == [nested.pk]
        assert nested.descendant_ids() == []

    def test_edit_comment(self, db, comment):
        """Test editing a comment tracks the edit."""
        comment.edit("Updated content")
        comment.refresh_from_db()

        assert comment.content == "Updated content"
        assert comment.is_edited
        assert comment.edit_count == 1

    def test_deleting_parent_cascades(self, db, post, reader, comment):
        """Test the parent foreign key removes replies at every depth."""
        reply = Comment.objects.create(post=post, author=reader, content="a", parent=comment)
        Comment.objects.create(post=post, author=reader, content="b", parent=reply)

        comment.delete()
        assert Comment.objects.count() == 0


class TestBuildThread:
    """Tests for arranging flat comments into a tree."""

    def _make_tree(self, post, user):
        root = Comment.objects.create(post=post, author=user, content="root")
        child = Comment.objects.create(post=post, author=user, content="child", parent=root)
        grandchild = Comment.objects.create(
            post=post, author=user, content="grandchild", parent=child
        )
        return root, child, grandchild

    def test_unlimited_depth(self, db, post, reader):
        root, child, grandchild = self._make_tree(post, reader)

        roots = build_thread(list(Comment.objects.filter(post=post)))

        assert roots == [root]
        assert roots[0].thread_replies == [child]
        assert roots[0].thread_replies[0].thread_replies == [grandchild]

    def test_limited_depth(self, db, post, reader):
        root, child, _ = self._make_tree(post, reader)

        roots = build_thread(list(Comment.objects.filter(post=post)), depth=1)

        assert roots[0].thread_replies == [child]
        assert roots[0].thread_replies[0].thread_replies == []

    def test_depth_zero_returns_roots_only(self, db, post, reader):
        root, _, _ = self._make_tree(post, reader)

        roots = build_thread(list(Comment.objects.filter(post=post)), depth=0)

        assert roots == [root]
        assert roots[0].thread_replies == []
