"""
django-inkwell - a Django blogging core.

Features:
- Posts with categories, tags, view counting and draft/published status
- Threaded comments of any depth with cascading deletes
- Reaction ledger (likes, hearts, claps) with one-vote-per-user toggles
- Author-or-admin authorization for every edit and delete
- Saved posts, profile, activity and stats for users
"""

__version__ = "0.1.0"
