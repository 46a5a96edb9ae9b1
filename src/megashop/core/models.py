"""Core models for MegaShop."""

import uuid

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.cache import cache
from django.db import models
from django.utils import timezone

SETTING_CACHE_TIMEOUT = 3600


class UserManager(BaseUserManager):
    """Custom user manager using email as the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a regular user with the given email and password."""
        if not email:
            raise ValueError("Users must have an email address")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a superuser with the given email and password."""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", User.Role.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Custom user model using email as the username."""

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        USER = "user", "User"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    username = None  # Remove username field
    name = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)
    email_verified_at = models.DateTimeField(null=True, blank=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        # Admins get into the Django admin as well
        if self.role == self.Role.ADMIN:
            self.is_staff = True
        super().save(*args, **kwargs)

    @property
    def is_admin(self):
        return self.is_superuser or self.role == self.Role.ADMIN

    @property
    def has_verified_email(self):
        return self.email_verified_at is not None

    def mark_email_verified(self):
        """Stamp the verification time. Returns False if already verified."""
        if self.has_verified_email:
            return False
        self.email_verified_at = timezone.now()
        self.save(update_fields=["email_verified_at"])
        return True

    def get_display_name(self):
        """Get display name for the user."""
        if self.name:
            return self.name
        if self.first_name or self.last_name:
            return f"{self.first_name} {self.last_name}".strip()
        return self.email.split("@")[0]


class Setting(models.Model):
    """Key/value store for settings editable from the admin panel.

    Values are JSON so a setting can hold a flag, a string or a small dict.
    Reads go through the cache; writes invalidate it.
    """

    key = models.CharField(max_length=255, unique=True)
    value = models.JSONField(null=True, blank=True)
    group = models.CharField(max_length=100, default="general", db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["group", "key"]

    def __str__(self):
        return self.key

    @staticmethod
    def cache_key(key):
        return f"setting_{key}"

    @classmethod
    def get_value(cls, key, default=None):
        """Get a setting value by key, falling back to ``default``."""
        cached = cache.get(cls.cache_key(key))
        if cached is not None:
            return cached

        setting = cls.objects.filter(key=key).first()
        if setting is None:
            return default

        cache.set(cls.cache_key(key), setting.value, SETTING_CACHE_TIMEOUT)
        return setting.value

    @classmethod
    def set_value(cls, key, value, group="general"):
        """Create or update a setting and drop its cached value."""
        setting, _ = cls.objects.update_or_create(
            key=key,
            defaults={"value": value, "group": group},
        )
        cache.delete(cls.cache_key(key))
        return setting

    @classmethod
    def get_group(cls, group):
        """Get all settings in a group."""
        return cls.objects.filter(group=group)
