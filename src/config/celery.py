"""
Celery configuration for the storefront admin API.

``DJANGO_SETTINGS_MODULE`` is set before the app is instantiated so the
worker reads Django settings (``CELERY_`` prefix).
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("storefront_admin")

app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up tasks.py from every installed app
app.autodiscover_tasks()
