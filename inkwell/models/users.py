"""
User model for django-inkwell.

Set ``AUTH_USER_MODEL = "inkwell.User"`` in your project settings.
"""
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone

from ..conf import inkwell_settings
from ..permissions import ROLE_ADMIN, ROLE_AUTHOR


def default_avatar():
    return inkwell_settings.DEFAULT_AVATAR


class UserManager(BaseUserManager):
    """Manager creating users keyed by email."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("Users must have an email address")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", ROLE_ADMIN)
        return self._create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Registered user.

    Authors write posts and comments; admins may additionally modify
    anyone's content. Saved posts form an unordered membership list.
    """

    ROLE_CHOICES = [
        (ROLE_AUTHOR, "Author"),
        (ROLE_ADMIN, "Admin"),
    ]

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=100)
    avatar = models.CharField(
        max_length=255,
        default=default_avatar,
        help_text="Reference returned by the file storage",
    )
    bio = models.TextField(blank=True, max_length=500)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_AUTHOR)
    saved_posts = models.ManyToManyField(
        "inkwell.Post",
        blank=True,
        related_name="saved_by",
    )

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        ordering = ["-date_joined"]

    def __str__(self):
        return self.name or self.email

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN
