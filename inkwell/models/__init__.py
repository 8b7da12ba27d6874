"""
Models for django-inkwell.

All models are importable from inkwell.models:

    from inkwell.models import User, Post, Category, Tag, Comment, Reaction
"""
from .users import User, UserManager
from .posts import Category, Tag, Post
from .comments import Comment, build_thread
from .reactions import Reaction, ReactionLedger, ToggleResult

__all__ = [
    # Users
    "User",
    "UserManager",
    # Posts
    "Category",
    "Tag",
    "Post",
    # Comments
    "Comment",
    "build_thread",
    # Reactions
    "Reaction",
    "ReactionLedger",
    "ToggleResult",
]
