from pathlib import Path

import environ

from .project.testing import TESTING

env = environ.FileAwareEnv()

SECRET_KEY = env("SECRET_KEY", default="THIS-is-a-Secret")


############
# Database #
############
INSTALL_ROOT = Path(__file__).resolve().parents[2]

DATABASES = {
    "default": env.db(
        "DATABASE_URL", default=f"sqlite:///{INSTALL_ROOT / 'sitegen.sqlite3'}"
    ),
}
DATABASES["default"]["TEST"] = {"SERIALIZE": False}


#####################################
# Directories, Apps, and Middleware #
#####################################
DEBUG = env.bool("DEBUG", default=True)
DEVELOPMENT = env.bool("DEVELOPMENT", default=True)
ALLOWED_HOSTS: list[str] = env.list("ALLOWED_HOSTS", default=["*"])

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "sitegen.urls"

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # sitegen apps
    "sitegen.content",
    "sitegen.sitemap_dump",
]


################
# Misc. Django #
################
USE_I18N = False
DEFAULT_CHARSET = "utf-8"
LANGUAGE_CODE = "en-us"
USE_TZ = True
TIME_ZONE = env("TIME_ZONE", default="UTC")
DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

if TESTING:
    DEBUG = False
