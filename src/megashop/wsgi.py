"""WSGI config for MegaShop project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "megashop.settings.prod")

application = get_wsgi_application()
