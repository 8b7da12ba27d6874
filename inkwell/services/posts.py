"""
Post lifecycle: create, read, list, update, delete, react.
"""
import logging
from collections import namedtuple

from django.db import models, transaction
from django.db.models import Q

from ..conf import inkwell_settings
from ..models import Category, Comment, Post, Tag
from ..permissions import ensure_can_modify
from .. import validators
from ..exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)

PostPage = namedtuple("PostPage", ["items", "total", "page", "limit", "pagination"])


def _post_queryset():
    return Post.objects.select_related("author").prefetch_related("categories", "tags")


def _clean_categories(categories):
    if categories is None:
        return [inkwell_settings.DEFAULT_CATEGORY]
    return validators.string_list(categories, "categories", allow_empty=False)


def create_post(
    actor,
    title,
    content,
    summary=None,
    categories=None,
    tags=None,
    cover_image=None,
    status=None,
):
    """
    Create a post owned by ``actor``.

    Missing categories default to the configured default category; a
    missing cover image falls back to the placeholder reference.
    """
    title = validators.required_text(title, "title", inkwell_settings.TITLE_MAX_LENGTH)
    content = validators.rich_content(content)
    summary = validators.optional_text(
        summary or "", "summary", inkwell_settings.SUMMARY_MAX_LENGTH
    )
    category_names = _clean_categories(categories)
    tag_names = validators.string_list(tags if tags is not None else [], "tags")
    status = validators.choice(status or Post.STATUS_PUBLISHED, Post.STATUS_CHOICES, "status")

    with transaction.atomic():
        post = Post.objects.create(
            title=title,
            content=content,
            summary=summary,
            cover_image=cover_image or inkwell_settings.DEFAULT_COVER_IMAGE,
            author=actor,
            status=status,
            reactions={kind: 0 for kind in Post.reaction_kinds()},
        )
        post.categories.set(Category.objects.resolve(category_names))
        post.tags.set(Tag.objects.resolve(tag_names))

    logger.info("Post %s created by user %s", post.pk, actor.pk)
    return post


def get_post(post_id):
    """
    Fetch one post, counting the read.

    The view counter is bumped with a single UPDATE ... SET view_count =
    view_count + 1, so concurrent readers never lose increments.
    """
    with transaction.atomic():
        try:
            updated = Post.objects.filter(pk=post_id).update(
                view_count=models.F("view_count") + 1
            )
        except (ValueError, TypeError):
            updated = 0
        if not updated:
            raise NotFound("Blog not found")
        return _post_queryset().get(pk=post_id)


def list_posts(
    search=None,
    author_id=None,
    category=None,
    tag=None,
    status=None,
    page=None,
    limit=None,
):
    """
    Filtered, paginated post listing, newest first.

    ``pagination`` holds ``next`` and/or ``prev`` as ``{page, limit}``
    when those pages exist.
    """
    page = validators.positive_int(page, "page", default=1)
    limit = validators.positive_int(
        limit,
        "limit",
        default=inkwell_settings.POSTS_PER_PAGE,
        maximum=inkwell_settings.MAX_POSTS_PER_PAGE,
    )

    author_id = validators.positive_int(author_id, "author")

    qs = _post_queryset()
    if author_id is not None:
        qs = qs.filter(author_id=author_id)
    if status:
        qs = qs.filter(status=validators.choice(status, Post.STATUS_CHOICES, "status"))
    if category:
        qs = qs.filter(categories__name__iexact=category)
    if tag:
        qs = qs.filter(tags__name__iexact=tag)
    if search:
        qs = qs.filter(
            Q(title__icontains=search)
            | Q(content__icontains=search)
            | Q(categories__name__icontains=search)
            | Q(tags__name__icontains=search)
        )
    qs = qs.distinct()

    total = qs.count()
    start = (page - 1) * limit
    end = page * limit
    items = list(qs[start:end])

    pagination = {}
    if end < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if start > 0:
        pagination["prev"] = {"page": page - 1, "limit": limit}

    return PostPage(items, total, page, limit, pagination)


def list_posts_by_author(author_id):
    return list(_post_queryset().filter(author_id=author_id))


def update_post(actor, post_id, **fields):
    """
    Change only the fields given; ``None`` means "leave as is".

    Accepted fields: title, content, summary, categories, tags,
    cover_image, status.
    """
    unknown = set(fields) - {
        "title", "content", "summary", "categories", "tags", "cover_image", "status",
    }
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

    post = validators.fetch(Post.objects.all(), post_id, "Blog not found")
    ensure_can_modify(actor, post.author_id, "update this blog")

    changed = []
    if fields.get("title") is not None:
        post.title = validators.required_text(
            fields["title"], "title", inkwell_settings.TITLE_MAX_LENGTH
        )
        changed.append("title")
    if fields.get("content") is not None:
        post.content = validators.rich_content(fields["content"])
        changed.append("content")
    if fields.get("summary") is not None:
        post.summary = validators.optional_text(
            fields["summary"], "summary", inkwell_settings.SUMMARY_MAX_LENGTH
        )
        changed.append("summary")
    if fields.get("cover_image") is not None:
        post.cover_image = validators.required_text(fields["cover_image"], "cover image")
        changed.append("cover_image")
    if fields.get("status") is not None:
        post.status = validators.choice(fields["status"], Post.STATUS_CHOICES, "status")
        changed.append("status")

    category_names = None
    if fields.get("categories") is not None:
        category_names = validators.string_list(
            fields["categories"], "categories", allow_empty=False
        )
    tag_names = None
    if fields.get("tags") is not None:
        tag_names = validators.string_list(fields["tags"], "tags")

    with transaction.atomic():
        if changed:
            post.save(update_fields=changed + ["updated_at"])
        if category_names is not None:
            post.categories.set(Category.objects.resolve(category_names))
        if tag_names is not None:
            post.tags.set(Tag.objects.resolve(tag_names))
        if (category_names is not None or tag_names is not None) and not changed:
            post.save(update_fields=["updated_at"])

    return _post_queryset().get(pk=post.pk)


def delete_post(actor, post_id):
    """
    Delete a post together with every comment on it.

    Runs as one transaction: either the post and its whole comment
    forest are gone, or nothing is. Returns the number of comments
    removed.
    """
    with transaction.atomic():
        post = validators.fetch(
            Post.objects.select_for_update(), post_id, "Blog not found"
        )
        ensure_can_modify(actor, post.author_id, "delete this blog")

        comments = Comment.objects.filter(post=post)
        removed = comments.count()
        comments.delete()
        post.delete()

    logger.info(
        "Post %s deleted by user %s with %d comments", post_id, actor.pk, removed
    )
    return removed


def toggle_post_reaction(actor, post_id, kind):
    post = validators.fetch(Post.objects.all(), post_id, "Blog not found")
    return post.ledger.toggle(actor, kind)
