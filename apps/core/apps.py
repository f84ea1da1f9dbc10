from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - CRM error taxonomy and the api_view decorator
        - Shared helpers (JSON bodies, pagination, owner lookups, formatting)
        - Dashboard view
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
