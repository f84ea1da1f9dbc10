from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AccountsConfig(AppConfig):
    """
    Users, session auth endpoints and UI preferences

    ready() wires the post_save handler that gives every new User a
    UserProfile with default preferences.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.accounts'
    verbose_name = _('Accounts & Preferences')

    def ready(self):
        from . import signals  # noqa: F401
