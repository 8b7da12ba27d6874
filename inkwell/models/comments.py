"""
Comment model for django-inkwell.
"""
from django.conf import settings
from django.db import models

from ..conf import inkwell_settings
from .reactions import ReactableModel


class Comment(ReactableModel):
    """
    Comment on a post.

    Supports:
    - Threaded replies via parent field, to any depth
    - Likes via the reaction ledger
    - Edit tracking
    """

    reaction_target = "comment"
    not_found_message = "Comment not found"

    post = models.ForeignKey(
        "inkwell.Post",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="comments",
    )
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="replies",
    )
    content = models.TextField()
    is_edited = models.BooleanField(default=False)
    edit_count = models.PositiveSmallIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["post", "parent", "created_at"], name="inkwell_comment_thread_idx"
            ),
        ]

    def __str__(self):
        return f"Comment by {self.author} on {self.post}"

    @classmethod
    def reaction_kinds(cls):
        return list(inkwell_settings.COMMENT_REACTION_KINDS)

    @property
    def preview(self):
        """Return truncated content for admin display."""
        if len(self.content) > 50:
            return self.content[:50] + "..."
        return self.content

    @property
    def is_reply(self):
        """Check if this is a reply to another comment."""
        return self.parent_id is not None

    @property
    def thread_depth(self):
        """Calculate nesting depth of this comment."""
        depth = 0
        current = self.parent
        while current:
            depth += 1
            current = current.parent
        return depth

    def descendant_ids(self):
        """Return ids of every reply below this comment, at any depth."""
        ids = []
        frontier = [self.pk]
        while frontier:
            children = list(
                Comment.objects.filter(parent_id__in=frontier).values_list("pk", flat=True)
            )
            ids.extend(children)
            frontier = children
        return ids

    def edit(self, new_content):
        """Replace the content and track the edit."""
        self.content = new_content
        self.is_edited = True
        self.edit_count += 1
        self.save(update_fields=["content", "is_edited", "edit_count", "updated_at"])


def build_thread(comments, depth=None):
    """
    Arrange a flat list of comments into a tree.

    Returns the top-level comments; each comment gets a ``thread_replies``
    list holding its children, nested down to ``depth`` levels of replies
    (``None`` means unlimited). Comments whose parent is missing from
    ``comments`` are treated as top-level so nothing is silently dropped.
    """
    by_id = {comment.pk: comment for comment in comments}
    children = {}
    roots = []
    for comment in comments:
        comment.thread_replies = []
        if comment.parent_id is None or comment.parent_id not in by_id:
            roots.append(comment)
        else:
            children.setdefault(comment.parent_id, []).append(comment)

    def attach(node, level):
        if depth is not None and level >= depth:
            return
        for child in children.get(node.pk, []):
            node.thread_replies.append(child)
            attach(child, level + 1)

    for root in roots:
        attach(root, 0)
    return roots
