from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
import uuid


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Club member account.

    Lifecycle: active -> archived (archived_at set) -> anonymized (deleted_at set).
    Contact fields are nulled on anonymization, so their unique constraints
    must accept several NULL rows.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, null=True, blank=True)
    phone_number = models.CharField(unique=True, max_length=32, null=True, blank=True)
    forename = models.CharField(max_length=100, null=True, blank=True)
    surname = models.CharField(max_length=100, null=True, blank=True)

    # Permissions (is_staff doubles as the club admin role)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    # Retention lifecycle
    archived_at = models.DateTimeField(null=True, blank=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['last_login'], name='users_last_login_idx'),
            models.Index(fields=['archived_at'], name='users_archived_at_idx'),
            models.Index(fields=['created_at'], name='users_created_at_idx'),
        ]

    def __str__(self):
        return self.email or f'anonymized user {self.id}'

    @property
    def is_active(self):
        """Archived and anonymized accounts cannot authenticate."""
        return self.archived_at is None and self.deleted_at is None

    @property
    def is_archived(self):
        return self.archived_at is not None

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def get_full_name(self):
        return ' '.join(part for part in (self.forename, self.surname) if part)

    def anonymize(self, now=None):
        """
        GDPR-compliant anonymization.

        Clears every personal field, stamps deleted_at and hides the
        member's cylinder sets. The archive timestamp is left as it is.
        """
        self.email = None
        self.phone_number = None
        self.forename = None
        self.surname = None
        self.deleted_at = now or timezone.now()
        self.set_unusable_password()
        self.save(update_fields=[
            'email', 'phone_number', 'forename', 'surname', 'deleted_at', 'password',
        ])
        self.cylinder_sets.update(archived=True)
