"""
Tests for counters under concurrent callers.

Each worker thread opens its own database connection, so these run
with real transactions instead of the per-test rollback wrapper.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import connections

from inkwell import services
from inkwell.models import Post, User

WORKERS = 4


def run_concurrently(func, calls):
    """Run ``func(*args)`` for every args tuple on a thread pool."""

    def call(args):
        try:
            return func(*args)
        finally:
            connections.close_all()

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        return list(pool.map(call, calls))


@pytest.fixture
def users(transactional_db):
    return [
        User.objects.create_user(
            email=f"worker{i}@example.com", password="testpass123", name=f"Worker {i}"
        )
        for i in range(8)
    ]


@pytest.mark.django_db(transaction=True)
class TestConcurrentReads:
    def test_views_count_every_read(self, post):
        """Test N concurrent reads add exactly N views."""
        reads = 20
        run_concurrently(services.get_post, [(post.pk,)] * reads)

        post.refresh_from_db()
        assert post.view_count == reads


@pytest.mark.django_db(transaction=True)
class TestConcurrentReactions:
    def test_distinct_users_all_counted(self, post, users):
        results = run_concurrently(
            services.toggle_post_reaction, [(user, post.pk, "likes") for user in users]
        )

        assert all(result.has_reacted for result in results)
        post.refresh_from_db()
        assert post.reaction_counts["likes"] == len(users)
        assert post.ledger.is_consistent()

    def test_repeated_toggles_net_out(self, post, users):
        """Test each user toggling twice leaves the counter where it started."""
        calls = [(user, post.pk, "hearts") for user in users] * 2
        run_concurrently(services.toggle_post_reaction, calls)

        post.refresh_from_db()
        assert post.reaction_counts["hearts"] == 0
        assert post.ledger.is_consistent()

    def test_reads_and_reactions_interleaved(self, post, users):
        def work(user):
            services.get_post(post.pk)
            return services.toggle_post_reaction(user, post.pk, "claps")

        run_concurrently(work, [(user,) for user in users])

        fresh = Post.objects.get(pk=post.pk)
        assert fresh.view_count == len(users)
        assert fresh.reaction_counts["claps"] == len(users)
        assert fresh.ledger.is_consistent()
