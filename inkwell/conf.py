"""
Configuration settings for django-inkwell.

Override these in your Django settings.py:

    INKWELL = {
        'POST_REACTION_KINDS': ['likes', 'hearts', 'claps'],
        'DEFAULT_CATEGORY': 'General',
        'ACCOUNT_DELETION_POLICY': 'block',
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Reactions
    "POST_REACTION_KINDS": ["likes", "hearts", "claps"],
    "COMMENT_REACTION_KINDS": ["likes"],

    # Posts
    "DEFAULT_CATEGORY": "General",
    "DEFAULT_COVER_IMAGE": "default-blog.jpg",
    "TITLE_MAX_LENGTH": 100,
    "SUMMARY_MAX_LENGTH": 200,
    "POSTS_PER_PAGE": 10,
    "MAX_POSTS_PER_PAGE": 100,

    # Comments
    "COMMENT_MAX_LENGTH": 500,

    # Users
    "DEFAULT_AVATAR": "default-avatar.jpg",
    "ACCOUNT_DELETION_POLICY": "block",  # "block" or "cascade"
    "ACTIVITY_LIMIT": 5,

    # SEO
    "SLUG_MAX_LENGTH": 100,
}

ACCOUNT_DELETION_POLICIES = ("block", "cascade")


class InkwellSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from inkwell.conf import inkwell_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid inkwell setting: {name}")

        user_settings = getattr(settings, "INKWELL", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def ACCOUNT_DELETION_POLICY(self):
        """Return the account deletion policy, rejecting unknown values."""
        user_settings = getattr(settings, "INKWELL", {})
        policy = user_settings.get(
            "ACCOUNT_DELETION_POLICY", DEFAULTS["ACCOUNT_DELETION_POLICY"]
        )
        if policy not in ACCOUNT_DELETION_POLICIES:
            raise ValueError(f"Unknown ACCOUNT_DELETION_POLICY: {policy!r}")
        return policy


inkwell_settings = InkwellSettings()
