from django.apps import AppConfig


class HomepageConfig(AppConfig):
    name = "megashop.homepage"
    verbose_name = "Homepage"
    default_auto_field = "django.db.models.BigAutoField"
