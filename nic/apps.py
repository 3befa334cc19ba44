from django.apps import AppConfig


class NicConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'nic'
    verbose_name = 'Sri Lanka NIC Analyzer'
