from django.apps import AppConfig


class ProfileConfig(AppConfig):
    name = "megashop.profile"
    verbose_name = "User Profile"
    default_auto_field = "django.db.models.BigAutoField"
