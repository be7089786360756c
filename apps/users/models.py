"""User domain models for Turlink.

Kullanıcılar tek bir acenteye (tenant) bağlıdır. Rol sunucu tarafında
tutulur; istemcinin beyan ettiği rol veya acente hiçbir zaman yetki
kaynağı değildir.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Geçersiz telefon formatı. Boşluksuz uluslararası format kullanın."),
)


class CustomUserManager(BaseUserManager):
    """E-postayı giriş adı olarak kullanan kullanıcı yöneticisi."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Kullanıcı oluşturmak için e-posta zorunludur.")
        email = self.normalize_email(email)

        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.OPERATOR)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.OWNER)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Süper kullanıcı is_staff=True olmalıdır.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Süper kullanıcı is_superuser=True olmalıdır.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        """Strip spaces and dashes so phones are stored uniformly."""
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Acente kullanıcısı."""

    class RoleChoices(models.TextChoices):
        OWNER = "owner", _("Acente sahibi")
        OPERATOR = "operator", _("Operatör")
        VIEWER = "viewer", _("İzleyici")

    username = models.CharField(
        _("Görünen ad"),
        max_length=150,
        blank=True,
    )
    email = models.EmailField(_("E-posta"), unique=True)
    phone = models.CharField(
        _("Telefon"),
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    role = models.CharField(
        _("Rol"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.OPERATOR,
    )
    tenant = models.ForeignKey(
        "tenants.Tenant",
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name="users",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        verbose_name = _("Kullanıcı")
        verbose_name_plural = _("Kullanıcılar")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    def is_owner(self) -> bool:
        return self.role == self.RoleChoices.OWNER

    def is_viewer(self) -> bool:
        return self.role == self.RoleChoices.VIEWER

    @property
    def display_name(self) -> str:
        return self.get_full_name() or self.username or self.email


# Backwards compatibility alias used in tests
User = CustomUser
