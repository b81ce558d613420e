import os
import sys
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv(
    "SECRET_KEY",
    "django-insecure-3m!t@x6v0q#k2p^z8r_w1b$j4n&h9c+f5y(l7s)d%e*g-a0u",
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv("DEBUG", "True").lower() == "true"

ENV = os.getenv("ENV", "DEVELOPMENT").upper()

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "taskpilot")

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "corsheaders",
    "rest_framework",
    "drf_spectacular",
    "taskpilot",
    "django.contrib.auth",
    "django.contrib.contenttypes",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "taskpilot.middlewares.jwt_auth.JWTAuthenticationMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "taskpilot_project.urls"
WSGI_APPLICATION = "taskpilot_project.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# MongoDB is the only store; Django's ORM is not used.
DATABASES = {}

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.MultiPartParser",
        "rest_framework.parsers.FormParser",
    ],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "taskpilot.exceptions.exception_handler.handle_exception",
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

TESTING = "test" in sys.argv or "pytest" in sys.modules or os.getenv("TESTING") == "True"

if TESTING:
    JWT_CONFIG = {
        "ALGORITHM": "HS256",
        "SECRET_KEY": "test-secret-key-for-jwt-signing-very-long-key-needed-for-security",
        "ACCESS_TOKEN_LIFETIME": int(os.getenv("ACCESS_LIFETIME", "604800")),
    }
else:
    JWT_CONFIG = {
        "ALGORITHM": os.getenv("JWT_ALGORITHM", "HS256"),
        "SECRET_KEY": os.getenv("JWT_SECRET", SECRET_KEY),
        "ACCESS_TOKEN_LIFETIME": int(os.getenv("ACCESS_LIFETIME", "604800")),
    }

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Email
EMAIL_SERVICE_ENABLED = os.getenv("EMAIL_SERVICE_ENABLED", "False").lower() == "true"
EMAIL_BACKEND = os.getenv("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.gmail.com")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "True").lower() == "true"
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "TaskPilot <noreply@taskpilot.app>")

PASSWORD_RESET = {
    "TOKEN_BYTES": 32,
    "TOKEN_LIFETIME": int(os.getenv("PASSWORD_RESET_TOKEN_LIFETIME", "3600")),
    "MIN_PASSWORD_LENGTH": 6,
}

# Attachments
MEDIA_ROOT = os.getenv("MEDIA_ROOT", str(BASE_DIR / "uploads"))
MEDIA_URL = "/uploads/"
ATTACHMENTS = {
    "MAX_UPLOAD_SIZE": int(os.getenv("MAX_UPLOAD_SIZE", str(10 * 1024 * 1024))),
    "ALLOWED_EXTENSIONS": [".jpg", ".jpeg", ".png", ".pdf", ".docx", ".txt", ".xlsx", ".xls"],
    "PROFILE_IMAGE_EXTENSIONS": [".jpg", ".jpeg", ".png"],
}
DATA_UPLOAD_MAX_MEMORY_SIZE = ATTACHMENTS["MAX_UPLOAD_SIZE"]

NOTIFICATIONS = {
    "LIST_LIMIT": 50,
}

CHAT = {
    "DEFAULT_PAGE": 1,
    "DEFAULT_PAGE_LIMIT": 50,
}

PUBLIC_PATHS = [
    "/favicon.ico",
    "/api/health",
    "/api/docs",
    "/api/schema",
    "/api/redoc",
    "/static/",
    "/api/auth/register",
    "/api/auth/login",
    "/api/teams/signup-teams",
    "/api/password-reset/",
    "/socket.io/",
    "/uploads/profile-images/",
]

# Paths that are public for one method only, e.g. the contact form submission.
PUBLIC_METHOD_PATHS = [
    ("POST", "/api/contact"),
]

SPECTACULAR_SETTINGS = {
    "TITLE": "TaskPilot API",
    "DESCRIPTION": "Role-based project and task management with notifications and team chat",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api/",
    "TAGS": [
        {"name": "auth", "description": "Registration and login"},
        {"name": "users", "description": "User directory, roles and profiles"},
        {"name": "teams", "description": "Team management"},
        {"name": "projects", "description": "Project management"},
        {"name": "tasks", "description": "Task management"},
        {"name": "chats", "description": "Direct and team chat"},
        {"name": "notifications", "description": "Notification feed"},
        {"name": "contact", "description": "Contact form"},
        {"name": "password-reset", "description": "Password reset flow"},
        {"name": "dashboard", "description": "Dashboard statistics"},
        {"name": "health", "description": "Health check endpoints"},
    ],
}

STATIC_URL = "/static/"

CORS_ALLOWED_ORIGINS = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOWED_HEADERS = [
    "accept",
    "accept-encoding",
    "authorization",
    "content-type",
    "dnt",
    "origin",
    "user-agent",
    "x-requested-with",
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "taskpilot": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "taskpilot_project": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django": {"handlers": ["console"], "level": "WARNING"},
    },
}
