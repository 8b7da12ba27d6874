"""
URL configuration for django-inkwell.

Include in your project urls.py:

    path('api/', include('inkwell.urls')),
"""
from django.urls import path

from . import views

app_name = "inkwell"

urlpatterns = [
    # Posts
    path("posts/", views.PostListView.as_view(), name="post_list"),
    path("posts/<int:pk>/", views.PostDetailView.as_view(), name="post_detail"),
    path("posts/<int:pk>/react/", views.PostReactionView.as_view(), name="post_react"),

    # Comments
    path("posts/<int:pk>/comments/", views.PostCommentsView.as_view(), name="post_comments"),
    path("comments/<int:pk>/", views.CommentDetailView.as_view(), name="comment_detail"),
    path("comments/<int:pk>/like/", views.CommentLikeView.as_view(), name="comment_like"),

    # Users
    path("auth/register/", views.RegisterView.as_view(), name="register"),
    path("auth/login/", views.LoginView.as_view(), name="login"),
    path("auth/logout/", views.LogoutView.as_view(), name="logout"),
    path("users/", views.UserListView.as_view(), name="user_list"),
    path("users/<int:pk>/", views.UserDetailView.as_view(), name="user_detail"),
    path("users/<int:pk>/posts/", views.UserPostsView.as_view(), name="user_posts"),

    # Current user
    path("me/", views.MeView.as_view(), name="me"),
    path("me/profile/", views.ProfileView.as_view(), name="profile"),
    path("me/saved/", views.SavedPostListView.as_view(), name="saved_posts"),
    path("me/saved/<int:pk>/", views.SavedPostView.as_view(), name="saved_post"),
    path("me/stats/", views.StatsView.as_view(), name="stats"),
    path("me/activity/", views.ActivityView.as_view(), name="activity"),
]
