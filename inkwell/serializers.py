"""
Plain-dict renderings of inkwell models for the JSON views.
"""


def user_summary(user):
    return {
        "id": user.pk,
        "name": user.name,
        "avatar": user.avatar,
    }


def user_detail(user):
    return {
        "id": user.pk,
        "name": user.name,
        "email": user.email,
        "avatar": user.avatar,
        "bio": user.bio,
        "role": user.role,
        "savedBlogs": list(user.saved_posts.values_list("pk", flat=True)),
        "createdAt": user.date_joined.isoformat(),
    }


def post_summary(post):
    return {
        "id": post.pk,
        "title": post.title,
        "summary": post.summary,
        "excerpt": post.preview,
        "coverImage": post.cover_image,
        "author": user_summary(post.author),
        "categories": post.category_names,
        "tags": post.tag_names,
        "reactions": post.reaction_counts,
        "views": post.view_count,
        "status": post.status,
        "createdAt": post.created_at.isoformat(),
        "updatedAt": post.updated_at.isoformat(),
    }


def post_detail(post, user=None):
    data = post_summary(post)
    data["content"] = post.content
    data["hasReacted"] = post.ledger.reacted_kinds(user)
    return data


def comment(obj, user=None):
    """Render a comment and, when threaded, its replies recursively."""
    return {
        "id": obj.pk,
        "content": obj.content,
        "user": user_summary(obj.author),
        "blog": obj.post_id,
        "parent": obj.parent_id,
        "reactions": obj.reaction_counts,
        "hasLiked": "likes" in obj.ledger.reacted_kinds(user),
        "isEdited": obj.is_edited,
        "replies": [comment(reply, user) for reply in getattr(obj, "thread_replies", [])],
        "createdAt": obj.created_at.isoformat(),
        "updatedAt": obj.updated_at.isoformat(),
    }


def activity(item):
    data = dict(item)
    data["createdAt"] = item["createdAt"].isoformat()
    return data
