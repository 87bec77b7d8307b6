"""WSGI config for the ridelist project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "ridelist.settings")

application = get_wsgi_application()
