"""Celery application for the outbox relay.

``DJANGO_SETTINGS_MODULE`` is set before the app is instantiated so the
worker reads the ``CELERY_``-prefixed Django settings.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("shopflow")

app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up tasks.py in every installed app
app.autodiscover_tasks()
