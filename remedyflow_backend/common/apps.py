# common/apps.py

"""
COMMON APP CONFIG

Shared plumbing for every API module:
- domain error taxonomy + HTTP mapping
- response envelope helpers
- DRF exception handler + pagination
"""

from django.apps import AppConfig


class CommonConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "common"
    verbose_name = "Common"
