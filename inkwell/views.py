"""
JSON views for django-inkwell.

Every response uses the envelope ``{"success": bool, "data": ..., "message": str}``.
Request bodies may be JSON or form-encoded; list fields sent as JSON
strings are decoded here before reaching the domain operations.
"""
import json
import logging

from django.contrib.auth import authenticate, login, logout
from django.db import DatabaseError
from django.http import JsonResponse, QueryDict
from django.views import View

from . import serializers, services
from .exceptions import InkwellError, InternalError, Unauthenticated, ValidationError

logger = logging.getLogger(__name__)


def success(data=None, status=200, message=None, **extra):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update(extra)
    return JsonResponse(body, status=status)


def failure(error):
    return JsonResponse(
        {"success": False, "message": error.message},
        status=error.status_code,
    )


def decode_list(value, label):
    """Turn a JSON-encoded list string into a list; pass other values through."""
    if not isinstance(value, str):
        return value
    try:
        decoded = json.loads(value)
    except ValueError:
        raise ValidationError(f"Invalid {label} format")
    if not isinstance(decoded, list):
        raise ValidationError(f"Invalid {label} format")
    return decoded


class ApiView(View):
    """
    Base view: authentication gate, body parsing and error translation.

    Methods listed in ``public_methods`` skip the authentication check.
    """

    public_methods = ()

    def dispatch(self, request, *args, **kwargs):
        try:
            method = request.method.lower()
            if method not in self.public_methods and not request.user.is_authenticated:
                raise Unauthenticated("Not authorized to access this route")
            return super().dispatch(request, *args, **kwargs)
        except InkwellError as exc:
            return failure(exc)
        except DatabaseError:
            logger.exception("Storage failure handling %s %s", request.method, request.path)
            return failure(InternalError())

    def payload(self):
        """Return the request body as a dict."""
        request = self.request
        if request.content_type == "application/json":
            if not request.body:
                return {}
            try:
                data = json.loads(request.body)
            except ValueError:
                raise ValidationError("Malformed JSON body")
            if not isinstance(data, dict):
                raise ValidationError("Malformed JSON body")
            return data
        if request.method == "POST":
            return request.POST.dict()
        return QueryDict(request.body).dict()


class PostListView(ApiView):
    """List posts (public) or create one."""

    public_methods = ("get",)

    def get(self, request):
        params = request.GET
        page = services.list_posts(
            search=params.get("search"),
            author_id=params.get("author"),
            category=params.get("category"),
            tag=params.get("tag"),
            status=params.get("status"),
            page=params.get("page"),
            limit=params.get("limit"),
        )
        return success(
            [serializers.post_summary(post) for post in page.items],
            count=len(page.items),
            total=page.total,
            pagination=page.pagination,
        )

    def post(self, request):
        data = self.payload()
        post = services.create_post(
            request.user,
            title=data.get("title"),
            content=data.get("content"),
            summary=data.get("summary"),
            categories=decode_list(data.get("categories"), "categories"),
            tags=decode_list(data.get("tags"), "tags"),
            cover_image=data.get("coverImage"),
            status=data.get("status"),
        )
        return success(serializers.post_detail(post, request.user), status=201)


class PostDetailView(ApiView):
    """Read (counting the view), update or delete a single post."""

    public_methods = ("get",)

    def get(self, request, pk):
        post = services.get_post(pk)
        return success(serializers.post_detail(post, request.user))

    def put(self, request, pk):
        data = self.payload()
        post = services.update_post(
            request.user,
            pk,
            title=data.get("title"),
            content=data.get("content"),
            summary=data.get("summary"),
            categories=decode_list(data.get("categories"), "categories"),
            tags=decode_list(data.get("tags"), "tags"),
            cover_image=data.get("coverImage"),
            status=data.get("status"),
        )
        return success(serializers.post_detail(post, request.user))

    patch = put

    def delete(self, request, pk):
        services.delete_post(request.user, pk)
        return success({}, message="Blog removed")


class PostReactionView(ApiView):
    """Toggle the acting user's reaction of a given type on a post."""

    def put(self, request, pk):
        result = services.toggle_post_reaction(request.user, pk, self.payload().get("type"))
        return success(result.counts, hasReacted=result.has_reacted)

    post = put


class PostCommentsView(ApiView):
    public_methods = ("get",)

    def get(self, request, pk):
        depth = request.GET.get("depth")
        if depth not in (None, ""):
            try:
                depth = int(depth)
            except ValueError:
                raise ValidationError("Invalid depth")
        else:
            depth = None
        comments = services.list_comments(pk, depth=depth)
        return success(
            [serializers.comment(c, request.user) for c in comments],
            count=len(comments),
        )

    def post(self, request, pk):
        data = self.payload()
        comment = services.add_comment(
            request.user,
            pk,
            data.get("content"),
            parent_id=data.get("parent"),
        )
        return success(serializers.comment(comment, request.user), status=201)


class CommentDetailView(ApiView):
    def put(self, request, pk):
        comment = services.update_comment(request.user, pk, self.payload().get("content"))
        return success(serializers.comment(comment, request.user))

    def delete(self, request, pk):
        services.delete_comment(request.user, pk)
        return success({}, message="Comment removed")


class CommentLikeView(ApiView):
    def put(self, request, pk):
        result = services.toggle_comment_reaction(request.user, pk, "likes")
        return success(result.counts, hasReacted=result.has_reacted)

    post = put


class RegisterView(ApiView):
    """Create an account and start a session for it."""

    public_methods = ("post",)

    def post(self, request):
        data = self.payload()
        user = services.register_user(data.get("name"), data.get("email"), data.get("password"))
        login(request, user, backend="django.contrib.auth.backends.ModelBackend")
        return success(serializers.user_detail(user), status=201)


class LoginView(ApiView):
    """Start a session for an email and password pair."""

    public_methods = ("post",)

    def post(self, request):
        data = self.payload()
        email = data.get("email")
        password = data.get("password")
        if not email or not password:
            raise ValidationError("Please provide an email and password")
        user = authenticate(request, email=email, password=password)
        if user is None:
            raise Unauthenticated("Invalid credentials")
        login(request, user)
        return success(serializers.user_detail(user))


class LogoutView(ApiView):
    def post(self, request):
        logout(request)
        return success({}, message="Logged out")


class UserListView(ApiView):
    public_methods = ("get",)

    def get(self, request):
        users = services.list_users()
        return success([serializers.user_summary(u) for u in users], count=len(users))


class UserDetailView(ApiView):
    public_methods = ("get",)

    def get(self, request, pk):
        return success(serializers.user_summary(services.get_user(pk)))

    def delete(self, request, pk):
        services.delete_account(request.user, pk)
        return success({}, message="User account deleted successfully")


class UserPostsView(ApiView):
    public_methods = ("get",)

    def get(self, request, pk):
        posts = services.list_posts_by_author(services.get_user(pk).pk)
        return success([serializers.post_summary(p) for p in posts], count=len(posts))


class MeView(ApiView):
    def get(self, request):
        return success(serializers.user_detail(request.user))

    def delete(self, request):
        services.delete_account(request.user)
        return success({}, message="User account deleted successfully")


class ProfileView(ApiView):
    def put(self, request):
        data = self.payload()
        user = services.update_profile(
            request.user,
            name=data.get("name"),
            bio=data.get("bio"),
            avatar=data.get("avatar"),
        )
        return success(serializers.user_detail(user))


class SavedPostListView(ApiView):
    def get(self, request):
        posts = services.saved_posts(request.user)
        return success([serializers.post_summary(p) for p in posts], count=len(posts))


class SavedPostView(ApiView):
    def post(self, request, pk):
        services.save_post(request.user, pk)
        return success(message="Blog saved successfully")

    def delete(self, request, pk):
        services.unsave_post(request.user, pk)
        return success(message="Blog removed from saved")


class StatsView(ApiView):
    def get(self, request):
        return success(services.user_stats(request.user))


class ActivityView(ApiView):
    def get(self, request):
        items = services.user_activity(request.user)
        return success([serializers.activity(item) for item in items], count=len(items))
