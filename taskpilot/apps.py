from django.apps import AppConfig
from django.conf import settings
import logging
import sys

logger = logging.getLogger(__name__)


class TaskPilotConfig(AppConfig):
    name = "taskpilot"

    def ready(self):
        """Initialize application components when Django starts"""

        if "test" in sys.argv or settings.TESTING:
            logger.info("Test mode detected - skipping database initialization")
            return

        if not any(server in arg for arg in sys.argv for server in ("runserver", "gunicorn", "uwsgi")):
            return

        from taskpilot_project.db.init import initialize_database

        if not initialize_database():
            logger.error("Database initialization failed; requests touching MongoDB will error")
