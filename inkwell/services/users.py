"""
Registration, profiles, saved posts, stats and account deletion.
"""
import logging

from django.db import IntegrityError, transaction

from ..conf import inkwell_settings
from ..exceptions import Conflict, ValidationError
from ..models import Comment, Post, Reaction, User
from ..permissions import ensure_can_modify
from .. import validators

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6

# Activity verb per post reaction kind
REACTION_ACTIONS = {
    "likes": "liked",
    "hearts": "loved",
    "claps": "clapped",
}


def register_user(name, email, password):
    """Create an author account. Emails are unique, case-insensitively."""
    name = validators.required_text(name, "name", 100)
    email = validators.email_address(email)
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Please enter a password with {PASSWORD_MIN_LENGTH} or more characters"
        )

    if User.objects.filter(email__iexact=email).exists():
        raise Conflict("User already exists with this email")

    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, name=name)
    except IntegrityError:
        raise Conflict("User already exists with this email")

    logger.info("User %s registered", user.pk)
    return user


def get_user(user_id):
    return validators.fetch(User.objects.all(), user_id, "User not found")


def list_users():
    return list(User.objects.all())


def update_profile(actor, name=None, bio=None, avatar=None):
    """Partial profile update; ``avatar`` is a file-storage reference."""
    changed = []
    if name is not None:
        actor.name = validators.required_text(name, "name", 100)
        changed.append("name")
    if bio is not None:
        actor.bio = validators.optional_text(bio, "bio", 500)
        changed.append("bio")
    if avatar is not None:
        actor.avatar = validators.required_text(avatar, "avatar")
        changed.append("avatar")
    if changed:
        actor.save(update_fields=changed)
    return actor


def save_post(actor, post_id):
    post = validators.fetch(Post.objects.all(), post_id, "Blog not found")
    if actor.saved_posts.filter(pk=post.pk).exists():
        raise Conflict("Blog already saved")
    actor.saved_posts.add(post)
    return post


def unsave_post(actor, post_id):
    post = validators.fetch(Post.objects.all(), post_id, "Blog not found")
    if not actor.saved_posts.filter(pk=post.pk).exists():
        raise ValidationError("Blog not saved")
    actor.saved_posts.remove(post)
    return post


def saved_posts(actor):
    return list(
        actor.saved_posts.select_related("author").prefetch_related("categories", "tags")
    )


def user_stats(user):
    """Counts of what the user wrote and the reactions their posts received."""
    received = {kind: 0 for kind in Post.reaction_kinds()}
    for post in Post.objects.filter(author=user).only("reactions"):
        for kind, count in post.reaction_counts.items():
            received[kind] += count

    return {
        "totalBlogs": Post.objects.filter(author=user).count(),
        "totalComments": Comment.objects.filter(author=user).count(),
        "totalReactions": sum(received.values()),
        "totalLikes": received.get("likes", 0),
        "reactionsByKind": received,
        "reactedBlogsCount": Post.objects.filter(reaction_set__user=user)
        .distinct()
        .count(),
    }


def user_activity(user):
    """
    Recent posts, comments and reactions by ``user``, newest first.

    Each source contributes at most ACTIVITY_LIMIT items.
    """
    limit = inkwell_settings.ACTIVITY_LIMIT
    activities = []

    for post in Post.objects.filter(author=user).order_by("-created_at")[:limit]:
        activities.append({
            "type": "blog",
            "action": "created",
            "blog": {"id": post.pk, "title": post.title},
            "createdAt": post.created_at,
        })

    comments = (
        Comment.objects.filter(author=user)
        .select_related("post")
        .order_by("-created_at")[:limit]
    )
    for comment in comments:
        activities.append({
            "type": "comment",
            "action": "commented",
            "blog": {"id": comment.post_id, "title": comment.post.title},
            "content": comment.preview,
            "createdAt": comment.created_at,
        })

    reactions = (
        Reaction.objects.filter(user=user, post__isnull=False)
        .select_related("post")
        .order_by("-created_at")[:limit]
    )
    for reaction in reactions:
        activities.append({
            "type": "reaction",
            "action": REACTION_ACTIONS.get(reaction.kind, reaction.kind),
            "blog": {"id": reaction.post_id, "title": reaction.post.title},
            "createdAt": reaction.created_at,
        })

    activities.sort(key=lambda item: item["createdAt"], reverse=True)
    return activities


def delete_account(actor, user_id=None):
    """
    Delete ``actor``'s own account, or any account when actor is an admin.

    With the ``block`` policy the account must not own posts or comments.
    With ``cascade`` the user's posts (with their comment trees) and
    comments are removed first. Reactions are always retracted through
    the ledger so counters stay in step with their membership sets.
    """
    policy = inkwell_settings.ACCOUNT_DELETION_POLICY
    if user_id is None:
        user_id = actor.pk
    target = get_user(user_id)
    ensure_can_modify(actor, target.pk, "delete this account")

    with transaction.atomic():
        owns_content = (
            Post.objects.filter(author=target).exists()
            or Comment.objects.filter(author=target).exists()
        )
        if owns_content and policy == "block":
            raise Conflict("Delete your blogs and comments before deleting the account")

        if policy == "cascade":
            removed, _ = Post.objects.filter(author=target).delete()
            Comment.objects.filter(author=target).delete()
            logger.info(
                "Cascade removed content of user %s (%d rows)", target.pk, removed
            )

        reactions = Reaction.objects.filter(user=target).select_related("post", "comment")
        for reaction in list(reactions):
            reaction.target.ledger.toggle(target, reaction.kind)

        target.delete()

    logger.info("User %s deleted by user %s", user_id, actor.pk)
