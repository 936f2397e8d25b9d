from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, TypedDict

from django.db.models import Q


class ChangeFrequency(str, Enum):
    """How often a page is expected to change, per the sitemap protocol."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@dataclass(frozen=True)
class SitemapUrl:
    """A single <url> record of a sitemap."""

    location: str
    priority: float
    change_frequency: ChangeFrequency
    last_modified: date | datetime | None = None


@dataclass(frozen=True)
class StaticRouteConfig:
    route: str
    priority: float
    change_frequency: ChangeFrequency
    # A relative time expression such as "-1 week", resolved at generation
    # time.
    last_modified_relative: str | None = None


@dataclass(frozen=True)
class EntityRouteConfig:
    """How the records of one model are turned into sitemap URLs.

    `route_params` maps each kwarg of `route` to a property path on the
    record, e.g. {"slug": "slug", "author": "author.username"}.

    `queryset_method` is either the name of a method on the model's default
    manager, or "<service id>::<method>" for a method on a service from the
    service locator. It can't be combined with `conditions`.
    """

    entity: str
    route: str
    route_params: dict[str, str]
    priority: float
    change_frequency: ChangeFrequency
    last_modified_property: str | None = None
    queryset_method: str | None = None
    conditions: tuple[dict[str, Any] | Q, ...] = field(default_factory=tuple)


class SitemapFileEntry(TypedDict):
    location: str
    last_modified: datetime


"""
The in-memory result of a sitemap index generation.

- `index`: the sitemapindex document.
- `sitemaps`: each shard's filename mapped to its urlset document.
"""


class SitemapIndexResult(TypedDict):
    index: str
    sitemaps: dict[str, str]
