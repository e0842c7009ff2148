"""
ASGI config for the medibook project.

HTTP only; the API has no websocket routes.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medibook.settings")

application = get_asgi_application()
