"""
WSGI config for acrebooks_project project.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "acrebooks_project.settings")

application = get_wsgi_application()
