"""
Input checks shared by the domain operations.

All of them raise inkwell.exceptions.ValidationError and return the
cleaned value.
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email

from .exceptions import NotFound, ValidationError
from .models.posts import plain_text


def required_text(value, label, max_length=None):
    """Return ``value`` stripped; reject missing, blank or oversized text."""
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Please provide a {label}")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{label.capitalize()} cannot be more than {max_length} characters")
    return value


def optional_text(value, label, max_length=None):
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {label}")
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{label.capitalize()} cannot be more than {max_length} characters")
    return value


def rich_content(value, label="content"):
    """Rich text must contain something besides markup."""
    if not isinstance(value, str) or not plain_text(value):
        raise ValidationError(f"{label.capitalize()} cannot be empty")
    return value


def string_list(value, label, allow_empty=True):
    """
    Accept an already decoded sequence of strings.

    Blank entries are dropped, duplicates (case-insensitive) collapsed.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ValidationError(f"Invalid {label} format")
    cleaned = []
    seen = set()
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(f"Invalid {label} format")
        item = item.strip()
        if item and item.lower() not in seen:
            seen.add(item.lower())
            cleaned.append(item)
    if not cleaned and not allow_empty:
        raise ValidationError(f"Please provide at least one entry in {label}")
    return cleaned


def choice(value, choices, label):
    allowed = [key for key, _ in choices]
    if value not in allowed:
        raise ValidationError(f"Invalid {label}")
    return value


def email_address(value):
    value = required_text(value, "email")
    try:
        validate_email(value)
    except DjangoValidationError:
        raise ValidationError("Please provide a valid email")
    return value


def positive_int(value, label, default=None, maximum=None):
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label}")
    if number < 1:
        raise ValidationError(f"Invalid {label}")
    if maximum is not None:
        number = min(number, maximum)
    return number


def fetch(queryset, pk, message):
    """Return the row with primary key ``pk`` or raise NotFound."""
    try:
        return queryset.get(pk=pk)
    except (queryset.model.DoesNotExist, ValueError, TypeError):
        raise NotFound(message)
