"""
Comment tree operations.
"""
import logging

from django.db import transaction

from ..conf import inkwell_settings
from ..exceptions import ValidationError
from ..models import Comment, Post, build_thread
from ..permissions import ensure_can_modify
from .. import validators

logger = logging.getLogger(__name__)


def _clean_content(content):
    return validators.required_text(
        content, "comment", inkwell_settings.COMMENT_MAX_LENGTH
    )


def add_comment(actor, post_id, content, parent_id=None):
    """
    Add a comment to a post, optionally as a reply.

    A parent must be an existing comment on the same post.
    """
    post = validators.fetch(Post.objects.all(), post_id, "Blog not found")

    parent = None
    if parent_id not in (None, ""):
        parent = validators.fetch(
            Comment.objects.filter(post=post), parent_id, "Parent comment not found"
        )

    content = _clean_content(content)

    comment = Comment.objects.create(
        post=post,
        author=actor,
        parent=parent,
        content=content,
        reactions={kind: 0 for kind in Comment.reaction_kinds()},
    )
    logger.info(
        "Comment %s added to post %s by user %s (parent %s)",
        comment.pk,
        post.pk,
        actor.pk,
        parent.pk if parent else None,
    )
    return comment


def list_comments(post_id, depth=None):
    """
    Return the top-level comments of a post, newest first.

    Each comment carries ``thread_replies`` with its replies (oldest
    first), nested ``depth`` levels deep; ``None`` means the whole tree.
    """
    if depth is not None:
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
            raise ValidationError("Invalid depth")

    post = validators.fetch(Post.objects.all(), post_id, "Blog not found")

    comments = list(
        Comment.objects.filter(post=post).select_related("author")
    )
    roots = build_thread(comments, depth=depth)
    roots.sort(key=lambda comment: (comment.created_at, comment.pk), reverse=True)
    return roots


def update_comment(actor, comment_id, content):
    comment = validators.fetch(
        Comment.objects.select_related("author"), comment_id, "Comment not found"
    )
    ensure_can_modify(actor, comment.author_id, "update this comment")
    comment.edit(_clean_content(content))
    return comment


def delete_comment(actor, comment_id):
    """
    Delete a comment and every reply beneath it, at any depth.

    Returns the number of comments removed.
    """
    with transaction.atomic():
        comment = validators.fetch(
            Comment.objects.select_for_update(), comment_id, "Comment not found"
        )
        ensure_can_modify(actor, comment.author_id, "delete this comment")

        subtree = [comment.pk] + comment.descendant_ids()
        Comment.objects.filter(pk__in=subtree).delete()

    logger.info(
        "Comment %s deleted by user %s with %d replies",
        comment_id,
        actor.pk,
        len(subtree) - 1,
    )
    return len(subtree)


def toggle_comment_reaction(actor, comment_id, kind="likes"):
    comment = validators.fetch(Comment.objects.all(), comment_id, "Comment not found")
    return comment.ledger.toggle(actor, kind)
