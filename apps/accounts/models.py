# Models:
# 1. User - Custom user model (email login, owns every CRM record)
# 2. UserProfile - UI preferences (theme, timezone, free-form preferences)


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _



# USER MANAGER (handles user creation)
class UserManager(BaseUserManager):
    """
    Custom user manager for User model

    Provides methods to:
    - Create regular users
    - Create superusers (admins)
    - Handle email-based authentication
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user

        Args:
            email (str): User's email address (required)
            password (str): User's password
            **extra_fields: Additional fields (first_name, last_name, etc.)

        Returns:
            User: The created user object

        Raises:
            ValueError: If email is not provided

        Example:
            user = User.objects.create_user(
                email='owner@shop.com',
                password='securepass123',
                first_name='Sara',
            )
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email)

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser (admin panel access)
        """
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True'))

        return self.create_user(email, password, **extra_fields)



# USER MODEL
class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model for the CRM

    Features:
    - Email-based authentication (no username)
    - Owner of contacts, opportunities, communications and documents;
      every query in the API is filtered by the logged-in user
    """

    email = models.EmailField(_('email address'), unique=True, max_length=255, db_index=True, help_text=_('Required. Used for login.'))
    first_name = models.CharField(_('first name'), max_length=50, blank=True)
    last_name = models.CharField(_('last name'), max_length=50, blank=True)
    is_active = models.BooleanField(_('active'), default=True, help_text=_('Designates whether this user should be treated as active. Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False, help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    # Use email as the unique identifier for authentication
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']

    def __str__(self):
        """
        Example:
            "Sara Adel (sara@shop.com)"
        """
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name} ({self.email})"
        return self.email

    def get_full_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    def get_short_name(self):
        return self.first_name if self.first_name else self.email

    def get_profile(self):
        """
        Return the user's profile, creating it with defaults if missing

        Users created before profiles existed (or through bulk inserts that
        skip signals) get one on first read.
        """
        profile, _created = UserProfile.objects.get_or_create(user=self)
        return profile

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.get_full_name(),
            'first_name': self.first_name,
            'last_name': self.last_name,
        }



# USER PROFILE MODEL (Preferences)

class UserProfile(models.Model):
    """
    Per-user UI preferences

    Automatically created when User is created (via signals), or on first
    read through User.get_profile().

    Fields:
    - theme: light / dark / system
    - timezone: IANA timezone name used by the front end
    - preferences: free-form JSON bag (table columns, default filters...)
    """

    THEME_CHOICES = [
        ('light', _('Light')),
        ('dark', _('Dark')),
        ('system', _('System')),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile', verbose_name=_('user'))
    theme = models.CharField(_('theme'), max_length=20, choices=THEME_CHOICES, default='system', help_text=_('UI theme preference'))
    timezone = models.CharField(_('timezone'), max_length=64, default='UTC', help_text=_('Preferred timezone (e.g. Africa/Cairo)'))
    preferences = models.JSONField(_('preferences'), default=dict, blank=True)
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        verbose_name = _('user profile')
        verbose_name_plural = _('user profiles')

    def __str__(self):
        return f"Profile for: {self.user.get_full_name()}"

    def to_dict(self):
        return {
            'theme': self.theme,
            'timezone': self.timezone,
            'preferences': self.preferences or {},
        }
