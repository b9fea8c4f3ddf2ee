"""URL patterns for authentication and user administration."""

from django.urls import path

from . import views

auth_urlpatterns = [
    path("register", views.RegisterView.as_view(), name="register"),
    path("login", views.LoginView.as_view(), name="login"),
    path("me", views.MeView.as_view(), name="me"),
]

user_urlpatterns = [
    path("all", views.UserListView.as_view(), name="list"),
    path("role", views.UserRoleView.as_view(), name="role"),
    path("<str:email>", views.UserDeleteView.as_view(), name="delete"),
]
