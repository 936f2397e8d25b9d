# ruff: noqa: F403
from .django import *
from .project.logging import *
from .project.sitemaps import *
from .project.testing import *
from .third_party.celery import *
