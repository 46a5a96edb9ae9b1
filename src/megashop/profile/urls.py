from django.urls import path

from . import views

app_name = "profile"

urlpatterns = [
    path("settings/profile/", views.ProfileView.as_view(), name="view"),
    path("settings/profile/update/", views.ProfileUpdateView.as_view(), name="update"),
    path("settings/profile/delete/", views.ProfileDeleteView.as_view(), name="delete"),
    path("settings/password/", views.PasswordView.as_view(), name="password"),
    path("settings/password/update/", views.PasswordUpdateView.as_view(), name="password-update"),
]
