"""
Tests for the reaction ledger.
"""
import pytest

from inkwell import services
from inkwell.exceptions import NotFound, ValidationError
from inkwell.models import Comment, Post, Reaction, User


@pytest.fixture
def users(db):
    return [
        User.objects.create_user(
            email=f"user{i}@example.com", password="testpass123", name=f"User {i}"
        )
        for i in range(4)
    ]


@pytest.fixture
def comment(post, reader):
    return services.add_comment(reader, post.pk, "Nice")


class TestPostReactions:
    """Toggle semantics on posts."""

    def test_like_then_unlike(self, db, post, reader):
        """Test a second toggle by the same user restores the prior state."""
        assert post.reaction_counts["likes"] == 0

        result = services.toggle_post_reaction(reader, post.pk, "likes")
        assert result.has_reacted is True
        assert result.count == 1
        assert result.counts == {"likes": 1, "hearts": 0, "claps": 0}

        result = services.toggle_post_reaction(reader, post.pk, "likes")
        assert result.has_reacted is False
        assert result.count == 0
        assert result.counts["likes"] == 0

    def test_counter_persisted(self, db, post, reader):
        services.toggle_post_reaction(reader, post.pk, "claps")
        post.refresh_from_db()
        assert post.reaction_counts["claps"] == 1
        assert post.ledger.has_reacted(reader, "claps")

    def test_kinds_are_independent(self, db, post, reader):
        """Test each kind keeps its own counter and membership."""
        services.toggle_post_reaction(reader, post.pk, "likes")
        services.toggle_post_reaction(reader, post.pk, "hearts")
        result = services.toggle_post_reaction(reader, post.pk, "likes")

        assert result.counts == {"likes": 0, "hearts": 1, "claps": 0}
        assert post.ledger.reacted_kinds(reader) == ["hearts"]

    def test_invalid_kind(self, db, post, reader):
        """Test kinds outside the allow-list are rejected."""
        with pytest.raises(ValidationError):
            services.toggle_post_reaction(reader, post.pk, "boos")
        assert Reaction.objects.count() == 0

    def test_missing_post(self, db, reader):
        with pytest.raises(NotFound):
            services.toggle_post_reaction(reader, 9999, "likes")

    def test_counter_matches_membership(self, db, post, users):
        """Test counter == |membership| after every toggle, for every kind."""
        sequence = [
            (0, "likes"), (1, "likes"), (0, "hearts"), (2, "claps"),
            (1, "likes"), (3, "likes"), (0, "likes"), (2, "claps"),
            (3, "hearts"), (1, "hearts"),
        ]
        for index, kind in sequence:
            services.toggle_post_reaction(users[index], post.pk, kind)
            assert post.ledger.is_consistent()

    def test_final_count_nets_toggles(self, db, post, users):
        """Test the final counter equals users with an odd number of toggles."""
        sequence = [0, 1, 2, 0, 3, 1, 1, 2, 2, 3, 3, 3]
        for index in sequence:
            services.toggle_post_reaction(users[index], post.pk, "likes")

        toggles = {i: sequence.count(i) for i in set(sequence)}
        expected = sum(1 for count in toggles.values() if count % 2 == 1)

        post.refresh_from_db()
        assert post.reaction_counts["likes"] == expected
        assert Reaction.objects.filter(post=post, kind="likes").count() == expected

    def test_stale_counter_is_recomputed(self, db, post, reader):
        """Test a toggle writes the membership size, never a drifted counter."""
        Post.objects.filter(pk=post.pk).update(reactions={"likes": 7})

        result = services.toggle_post_reaction(reader, post.pk, "likes")

        assert result.count == 1
        assert post.ledger.is_consistent()

    def test_retract_all(self, db, post, reader):
        services.toggle_post_reaction(reader, post.pk, "likes")
        services.toggle_post_reaction(reader, post.pk, "claps")

        post.ledger.retract_all(reader)
        post.refresh_from_db()

        assert post.reaction_counts == {"likes": 0, "hearts": 0, "claps": 0}
        assert post.ledger.reacted_kinds(reader) == []

    def test_post_removed_after_lookup(self, db, post, reader):
        """Test a post deleted under a held ledger reports NotFound."""
        ledger = post.ledger
        Post.objects.filter(pk=post.pk).delete()

        with pytest.raises(NotFound) as excinfo:
            ledger.toggle(reader, "likes")
        assert excinfo.value.message == "Blog not found"
        assert Reaction.objects.count() == 0


class TestCommentReactions:
    """Comments only accept likes."""

    def test_like_comment(self, db, comment, author):
        result = services.toggle_comment_reaction(author, comment.pk)
        assert result.has_reacted is True
        assert result.counts == {"likes": 1}

        result = services.toggle_comment_reaction(author, comment.pk)
        assert result.has_reacted is False
        assert result.counts == {"likes": 0}

    def test_comment_rejects_post_kinds(self, db, comment, author):
        with pytest.raises(ValidationError):
            services.toggle_comment_reaction(author, comment.pk, "hearts")

    def test_comment_and_post_ledgers_are_separate(self, db, post, comment, reader):
        services.toggle_post_reaction(reader, post.pk, "likes")
        services.toggle_comment_reaction(reader, comment.pk, "likes")
        services.toggle_comment_reaction(reader, comment.pk, "likes")

        post.refresh_from_db()
        comment.refresh_from_db()
        assert post.reaction_counts["likes"] == 1
        assert comment.reaction_counts["likes"] == 0
        assert Comment.objects.get(pk=comment.pk).ledger.is_consistent()

    def test_missing_comment(self, db, reader):
        with pytest.raises(NotFound):
            services.toggle_comment_reaction(reader, 9999)

    def test_comment_removed_after_lookup(self, db, comment, author):
        ledger = comment.ledger
        Comment.objects.filter(pk=comment.pk).delete()

        with pytest.raises(NotFound) as excinfo:
            ledger.toggle(author, "likes")
        assert excinfo.value.message == "Comment not found"
