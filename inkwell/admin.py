"""
Django admin configuration for inkwell.
"""
from django.contrib import admin
from django.contrib.auth import forms as auth_forms
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Category, Comment, Post, Reaction, Tag, User


class UserCreationForm(auth_forms.BaseUserCreationForm):
    class Meta:
        model = User
        fields = ("email", "name")


class UserChangeForm(auth_forms.UserChangeForm):
    class Meta:
        model = User
        fields = "__all__"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserChangeForm
    add_form = UserCreationForm
    list_display = ["email", "name", "role", "is_active", "date_joined"]
    list_filter = ["role", "is_active", "is_staff"]
    search_fields = ["email", "name"]
    ordering = ["-date_joined"]
    filter_horizontal = ["saved_posts", "groups", "user_permissions"]
    readonly_fields = ["date_joined", "last_login"]

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "avatar", "bio", "role")}),
        ("Saved", {"fields": ("saved_posts",), "classes": ("collapse",)}),
        ("Permissions", {
            "fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions"),
            "classes": ("collapse",),
        }),
        ("Dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "name", "password1", "password2"),
        }),
    )


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "post_count", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "post_count", "created_at"]
    search_fields = ["name", "slug"]
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ["created_at"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "author",
        "status",
        "view_count",
        "created_at",
    ]
    list_filter = ["status", "categories", "created_at"]
    search_fields = ["title", "content", "author__email", "author__name"]
    raw_id_fields = ["author"]
    filter_horizontal = ["categories", "tags"]
    date_hierarchy = "created_at"
    # Counters only move through the ledger and the view counter
    readonly_fields = ["reactions", "view_count", "created_at", "updated_at"]

    fieldsets = (
        (None, {
            "fields": ("title", "content", "summary", "cover_image", "author", "status")
        }),
        ("Taxonomy", {
            "fields": ("categories", "tags")
        }),
        ("Engagement", {
            "fields": ("reactions", "view_count", "created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "unpublish_posts"]

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"

    def get_readonly_fields(self, request, obj=None):
        # The author is fixed once the post exists
        if obj is None:
            return self.readonly_fields
        return [*self.readonly_fields, "author"]

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        count = queryset.update(status=Post.STATUS_PUBLISHED)
        self.message_user(request, f"{count} posts published.")

    @admin.action(description="Move selected posts to drafts")
    def unpublish_posts(self, request, queryset):
        count = queryset.update(status=Post.STATUS_DRAFT)
        self.message_user(request, f"{count} posts moved to drafts.")


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ["preview", "author", "post", "parent", "is_edited", "created_at"]
    list_filter = ["is_edited", "created_at"]
    search_fields = ["content", "author__email", "post__title"]
    raw_id_fields = ["post", "author", "parent"]
    readonly_fields = ["reactions", "edit_count", "created_at", "updated_at"]

    def get_readonly_fields(self, request, obj=None):
        # A comment never changes owner, post or thread position
        if obj is None:
            return self.readonly_fields
        return [*self.readonly_fields, "post", "author", "parent"]


@admin.register(Reaction)
class ReactionAdmin(admin.ModelAdmin):
    list_display = ["user", "kind", "target", "created_at"]
    list_filter = ["kind", "created_at"]
    search_fields = ["user__email", "post__title", "comment__content"]
    raw_id_fields = ["user", "post", "comment"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def delete_model(self, request, obj):
        """Retract through the ledger so the owner's counter follows."""
        obj.target.ledger.toggle(obj.user, obj.kind)

    def delete_queryset(self, request, queryset):
        for reaction in queryset.select_related("user", "post", "comment"):
            self.delete_model(request, reaction)
