from .base import *  # noqa: F403

DEBUG = False

EMAIL_SERVICE_ENABLED = False
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

MEDIA_ROOT = "/tmp/taskpilot-test-uploads"

# The tests use testcontainers to spin up their own MongoDB instance
DB_NAME = "testdb"
