"""
Post, Category, and Tag models for django-inkwell.
"""
from django.conf import settings
from django.db import models
from django.utils.html import strip_tags
from django.utils.text import slugify

from ..conf import inkwell_settings
from .reactions import ReactableModel


def default_cover_image():
    return inkwell_settings.DEFAULT_COVER_IMAGE


def unique_slug(model, name, exclude_pk=None):
    """Slugify ``name`` and suffix a counter until it is unused for ``model``."""
    base_slug = slugify(name)[:inkwell_settings.SLUG_MAX_LENGTH] or "item"
    slug = base_slug
    counter = 1
    while model.objects.filter(slug=slug).exclude(pk=exclude_pk).exists():
        slug = f"{base_slug}-{counter}"
        counter += 1
    return slug


class TaxonomyQuerySet(models.QuerySet):
    def resolve(self, names):
        """Return rows for ``names`` in the given order, creating missing ones."""
        rows = []
        for name in names:
            row = self.filter(name__iexact=name).first()
            if row is None:
                row = self.create(name=name)
            rows.append(row)
        return rows


class Category(models.Model):
    """Named category; a post belongs to one or more."""

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TaxonomyQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Category, self.name, exclude_pk=self.pk)
        super().save(*args, **kwargs)

    @property
    def post_count(self):
        """Return count of published posts in this category."""
        return self.posts.filter(status=Post.STATUS_PUBLISHED).count()


class Tag(models.Model):
    """Flat tag for posts."""

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TaxonomyQuerySet.as_manager()

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Tag, self.name, exclude_pk=self.pk)
        super().save(*args, **kwargs)

    @property
    def post_count(self):
        return self.posts.filter(status=Post.STATUS_PUBLISHED).count()


class Post(ReactableModel):
    """
    Blog post / article.

    Owns its reaction counters and view counter; comments point back at
    it and are removed with it.
    """

    STATUS_DRAFT = "draft"
    STATUS_PUBLISHED = "published"
    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PUBLISHED, "Published"),
    ]

    reaction_target = "post"
    not_found_message = "Blog not found"

    # Content
    title = models.CharField(max_length=255)
    content = models.TextField()
    summary = models.TextField(blank=True)
    cover_image = models.CharField(max_length=255, default=default_cover_image)

    # Author - uses Django's AUTH_USER_MODEL
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="posts",
    )

    # Taxonomy
    categories = models.ManyToManyField(Category, related_name="posts")
    tags = models.ManyToManyField(Tag, related_name="posts", blank=True)

    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_PUBLISHED,
    )

    # Engagement stats
    view_count = models.PositiveIntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["author", "-created_at"], name="inkwell_post_author_idx"),
            models.Index(fields=["status", "-created_at"], name="inkwell_post_status_idx"),
        ]

    def __str__(self):
        return self.title

    @classmethod
    def reaction_kinds(cls):
        return list(inkwell_settings.POST_REACTION_KINDS)

    @property
    def preview(self):
        """Return the summary, or truncated plain-text content."""
        if self.summary:
            return self.summary
        text = plain_text(self.content)
        if len(text) > 200:
            return text[:200] + "..."
        return text

    @property
    def category_names(self):
        return [category.name for category in self.categories.all()]

    @property
    def tag_names(self):
        return [tag.name for tag in self.tags.all()]


def plain_text(content):
    """Strip markup from rich text content."""
    return strip_tags(content or "").replace("&nbsp;", " ").strip()
