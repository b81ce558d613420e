from .base import *  # noqa: F403
import os

DEBUG = False

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS").split(",")

SECURE_SSL_REDIRECT = os.getenv("SECURE_SSL_REDIRECT", "False").lower() == "true"

SPECTACULAR_SETTINGS.update(  # noqa: F405
    {
        "SWAGGER_UI_SETTINGS": {
            "url": "/api/schema",
        },
    }
)
