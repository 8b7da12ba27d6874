"""
Domain operations for django-inkwell.

Views call these; they take the acting user explicitly and raise
inkwell.exceptions errors on failure.
"""
from .posts import (
    PostPage,
    create_post,
    delete_post,
    get_post,
    list_posts,
    list_posts_by_author,
    toggle_post_reaction,
    update_post,
)
from .comments import (
    add_comment,
    delete_comment,
    list_comments,
    toggle_comment_reaction,
    update_comment,
)
from .users import (
    delete_account,
    get_user,
    list_users,
    register_user,
    save_post,
    saved_posts,
    unsave_post,
    update_profile,
    user_activity,
    user_stats,
)

__all__ = [
    # Posts
    "PostPage",
    "create_post",
    "get_post",
    "list_posts",
    "list_posts_by_author",
    "update_post",
    "delete_post",
    "toggle_post_reaction",
    # Comments
    "add_comment",
    "list_comments",
    "update_comment",
    "delete_comment",
    "toggle_comment_reaction",
    # Users
    "register_user",
    "get_user",
    "list_users",
    "update_profile",
    "save_post",
    "unsave_post",
    "saved_posts",
    "user_stats",
    "user_activity",
    "delete_account",
]
