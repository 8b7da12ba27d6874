"""
Reaction ledger for django-inkwell.

Posts and comments carry a counter per reaction kind in a JSON field;
the set of users holding each reaction lives in the Reaction table.
The two are only ever changed together, under a row lock on the owner,
so each counter always equals the size of its membership set.
"""
from collections import namedtuple

from django.conf import settings
from django.db import models, transaction

from ..exceptions import NotFound, ValidationError


ToggleResult = namedtuple("ToggleResult", ["kind", "count", "has_reacted", "counts"])


class ReactableModel(models.Model):
    """
    Abstract base for models that accept reactions.

    Subclasses define ``reaction_kinds()`` and ``reaction_target``, the
    Reaction field pointing back at them.
    """

    reactions = models.JSONField(default=dict, blank=True)

    reaction_target = None
    not_found_message = "Not found"

    class Meta:
        abstract = True

    @classmethod
    def reaction_kinds(cls):
        raise NotImplementedError

    @property
    def reaction_counts(self):
        """Counters for every allowed kind, zero-filled."""
        stored = self.reactions or {}
        return {kind: int(stored.get(kind, 0)) for kind in self.reaction_kinds()}

    @property
    def ledger(self):
        return ReactionLedger(self)


class ReactionLedger:
    """
    Counter + membership pair per reaction kind for one post or comment.

    Usage:

        result = post.ledger.toggle(user, "likes")
        result.count, result.has_reacted
    """

    def __init__(self, owner):
        self.owner = owner
        self.model = type(owner)

    def _memberships(self):
        return Reaction.objects.filter(**{self.model.reaction_target: self.owner})

    def validate_kind(self, kind):
        if kind not in self.model.reaction_kinds():
            raise ValidationError("Invalid reaction type")

    def counts(self):
        return self.owner.reaction_counts

    def has_reacted(self, user, kind):
        return self._memberships().filter(user=user, kind=kind).exists()

    def reacted_kinds(self, user):
        """Kinds this user currently holds on the owner."""
        if user is None or not getattr(user, "is_authenticated", False):
            return []
        return sorted(
            self._memberships().filter(user=user).values_list("kind", flat=True)
        )

    def is_consistent(self):
        """Check that every counter equals the size of its membership set."""
        counts = self.model.objects.get(pk=self.owner.pk).reaction_counts
        for kind, count in counts.items():
            if self._memberships().filter(kind=kind).count() != count:
                return False
        return True

    def toggle(self, user, kind):
        """
        Flip ``user``'s membership for ``kind`` and update its counter.

        Returns a ToggleResult with the new counter, whether the user
        now holds the reaction, and the full counters object.
        """
        self.validate_kind(kind)

        with transaction.atomic():
            try:
                owner = self.model.objects.select_for_update().get(pk=self.owner.pk)
            except self.model.DoesNotExist:
                raise NotFound(self.model.not_found_message)
            members = Reaction.objects.filter(
                **{self.model.reaction_target: owner}, kind=kind
            )
            deleted, _ = members.filter(user=user).delete()
            has_reacted = not deleted
            if has_reacted:
                Reaction.objects.create(
                    **{self.model.reaction_target: owner}, user=user, kind=kind
                )

            counts = owner.reaction_counts
            counts[kind] = max(0, members.count())
            owner.reactions = counts
            owner.save(update_fields=["reactions"])

        self.owner.reactions = counts
        return ToggleResult(kind, counts[kind], has_reacted, dict(counts))

    def retract_all(self, user):
        """Remove every reaction ``user`` holds on the owner."""
        for kind in self.reacted_kinds(user):
            self.toggle(user, kind)


class Reaction(models.Model):
    """
    Membership of one user in one reaction kind on a post or a comment.

    Exactly one of ``post`` and ``comment`` is set.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reactions",
    )
    kind = models.CharField(max_length=20)
    post = models.ForeignKey(
        "inkwell.Post",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="reaction_set",
    )
    comment = models.ForeignKey(
        "inkwell.Comment",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="reaction_set",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(post__isnull=False, comment__isnull=True)
                    | models.Q(post__isnull=True, comment__isnull=False)
                ),
                name="inkwell_reaction_single_target",
            ),
            models.UniqueConstraint(
                fields=["post", "user", "kind"],
                condition=models.Q(post__isnull=False),
                name="inkwell_reaction_unique_post_user_kind",
            ),
            models.UniqueConstraint(
                fields=["comment", "user", "kind"],
                condition=models.Q(comment__isnull=False),
                name="inkwell_reaction_unique_comment_user_kind",
            ),
        ]

    def __str__(self):
        return f"{self.user} reacted {self.kind} to {self.target}"

    @property
    def target(self):
        return self.post if self.post_id else self.comment
