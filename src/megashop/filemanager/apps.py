from django.apps import AppConfig


class FileManagerConfig(AppConfig):
    name = "megashop.filemanager"
    verbose_name = "File Manager"
    default_auto_field = "django.db.models.BigAutoField"
