import os
from dotenv import load_dotenv

load_dotenv()

SETTINGS_MODULES = {
    "DEVELOPMENT": "taskpilot_project.settings.development",
    "PRODUCTION": "taskpilot_project.settings.production",
    "TEST": "taskpilot_project.settings.test",
}


def configure_settings_module():
    """
    Point DJANGO_SETTINGS_MODULE at the settings file matching the ENV variable.
    An explicitly exported DJANGO_SETTINGS_MODULE always wins.
    """
    env = os.getenv("ENV", "DEVELOPMENT").upper()
    module = SETTINGS_MODULES.get(env, SETTINGS_MODULES["DEVELOPMENT"])
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", module)
    return os.environ["DJANGO_SETTINGS_MODULE"]
