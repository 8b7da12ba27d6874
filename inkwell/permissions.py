"""
Authorization policy for posts and comments.

One predicate decides every update/delete: the actor must own the
entity or hold the admin role.
"""
import logging

from .exceptions import Unauthorized

logger = logging.getLogger(__name__)

ROLE_AUTHOR = "author"
ROLE_ADMIN = "admin"


def can_modify(actor_id, owner_id, actor_role):
    """Return True iff the actor owns the entity or is an admin."""
    if actor_role == ROLE_ADMIN:
        return True
    if actor_id is None or owner_id is None:
        return False
    return str(actor_id) == str(owner_id)


def ensure_can_modify(actor, owner_id, action="modify this resource"):
    """
    Raise Unauthorized unless ``actor`` may modify an entity owned by ``owner_id``.

    ``actor`` is any object exposing ``pk`` and ``role``.
    """
    if can_modify(actor.pk, owner_id, getattr(actor, "role", None)):
        return
    logger.warning(
        "User %s denied: not authorized to %s (owner %s)", actor.pk, action, owner_id
    )
    raise Unauthorized(f"Not authorized to {action}")
