"""Builds the sitemap machinery out of the Django settings.

Settings are validated here, when the configuration is loaded, so that a bad
priority or an ambiguous entity route fails before any generation starts.
See sitegen/settings/project/sitemaps.py for the available settings.
"""

from typing import Any

from django.conf import settings

from sitegen.sitemap_dump.exceptions import InvalidConfigurationError
from sitegen.sitemap_dump.generator import SitemapGenerator, UseIndex
from sitegen.sitemap_dump.index_writer import SitemapIndexWriter
from sitegen.sitemap_dump.providers import (
    EntityRouteUrlProvider,
    StaticRouteUrlProvider,
    UrlProvider,
)
from sitegen.sitemap_dump.registry import UrlProviderRegistry
from sitegen.sitemap_dump.services import ServiceLocator
from sitegen.sitemap_dump.types import (
    ChangeFrequency,
    EntityRouteConfig,
    StaticRouteConfig,
)
from sitegen.sitemap_dump.utils import make_providers_list
from sitegen.sitemap_dump.xml_writer import XmlWriter

DEFAULT_PRIORITY = 0.5
DEFAULT_CHANGEFREQ = ChangeFrequency.WEEKLY

STATIC_ROUTE_KEYS = {"route", "priority", "changefreq", "lastmod"}
ENTITY_ROUTE_KEYS = {
    "entity",
    "route",
    "route_params",
    "priority",
    "changefreq",
    "lastmod_property",
    "queryset_method",
    "conditions",
}


def _check_keys(
    raw: dict[str, Any], allowed: set[str], required: set[str], where: str
) -> None:
    unknown = set(raw) - allowed
    if unknown:
        raise InvalidConfigurationError(
            f"Unknown option(s) {sorted(unknown)} in {where}"
        )
    # An empty mapping is a valid value, e.g. route_params for a route
    # without kwargs.
    missing = {key for key in required if raw.get(key) in (None, "")}
    if missing:
        raise InvalidConfigurationError(
            f"Missing required option(s) {sorted(missing)} in {where}"
        )


def _priority(raw: dict[str, Any], where: str) -> float:
    try:
        priority = float(raw.get("priority", DEFAULT_PRIORITY))
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(
            f"Priority of {where} must be a number"
        ) from e
    if not 0.0 <= priority <= 1.0:
        raise InvalidConfigurationError(
            f"Priority of {where} must be between 0.0 and 1.0, got {priority}"
        )
    return priority


def _change_frequency(raw: dict[str, Any], where: str) -> ChangeFrequency:
    value = raw.get("changefreq", DEFAULT_CHANGEFREQ)
    try:
        return ChangeFrequency(value)
    except ValueError as e:
        choices = ", ".join(c.value for c in ChangeFrequency)
        raise InvalidConfigurationError(
            f"Invalid changefreq '{value}' in {where}, expected one of: "
            f"{choices}"
        ) from e


def load_static_route_configs(
    routes: list[dict[str, Any]],
) -> list[StaticRouteConfig]:
    configs = []
    for i, raw in enumerate(routes):
        where = f"SITEMAP_STATIC_ROUTES[{i}]"
        _check_keys(raw, STATIC_ROUTE_KEYS, {"route"}, where)
        configs.append(
            StaticRouteConfig(
                route=raw["route"],
                priority=_priority(raw, where),
                change_frequency=_change_frequency(raw, where),
                last_modified_relative=raw.get("lastmod"),
            )
        )
    return configs


def load_entity_route_configs(
    routes: list[dict[str, Any]],
) -> list[EntityRouteConfig]:
    configs = []
    for i, raw in enumerate(routes):
        where = f"SITEMAP_ENTITY_ROUTES[{i}]"
        _check_keys(
            raw, ENTITY_ROUTE_KEYS, {"entity", "route", "route_params"}, where
        )
        conditions = tuple(raw.get("conditions") or ())
        queryset_method = raw.get("queryset_method")
        if queryset_method is not None and conditions:
            raise InvalidConfigurationError(
                f"Cannot use both queryset_method and conditions in {where}"
            )
        configs.append(
            EntityRouteConfig(
                entity=raw["entity"],
                route=raw["route"],
                route_params=dict(raw["route_params"]),
                priority=_priority(raw, where),
                change_frequency=_change_frequency(raw, where),
                last_modified_property=raw.get("lastmod_property"),
                queryset_method=queryset_method,
                conditions=conditions,
            )
        )
    return configs


def get_base_url() -> str:
    base_url = getattr(settings, "SITEMAP_BASE_URL", "")
    if not base_url:
        raise InvalidConfigurationError("SITEMAP_BASE_URL must be set")
    return base_url


def get_use_index() -> UseIndex:
    value = getattr(settings, "SITEMAP_USE_INDEX", "auto")
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized == "auto":
        return "auto"
    if normalized in {"true", "1", "yes"}:
        return True
    if normalized in {"false", "0", "no"}:
        return False
    raise InvalidConfigurationError(
        f"SITEMAP_USE_INDEX must be 'auto', 'true' or 'false', got '{value}'"
    )


def get_index_threshold() -> int:
    threshold = getattr(settings, "SITEMAP_INDEX_THRESHOLD", 50_000)
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise InvalidConfigurationError(
            "SITEMAP_INDEX_THRESHOLD must be an integer"
        )
    if threshold < 1:
        raise InvalidConfigurationError(
            f"SITEMAP_INDEX_THRESHOLD must be at least 1, got {threshold}"
        )
    return threshold


def get_providers() -> list[UrlProvider]:
    """The static provider, one provider per entity route, then the custom
    providers, in that order.
    """
    base_url = get_base_url()
    providers: list[UrlProvider] = []

    static_configs = load_static_route_configs(
        getattr(settings, "SITEMAP_STATIC_ROUTES", [])
    )
    if static_configs:
        providers.append(StaticRouteUrlProvider(static_configs, base_url))

    services = ServiceLocator(getattr(settings, "SITEMAP_SERVICES", {}))
    chunk_size = getattr(settings, "SITEMAP_ITERATOR_CHUNK_SIZE", 2000)
    for config in load_entity_route_configs(
        getattr(settings, "SITEMAP_ENTITY_ROUTES", [])
    ):
        providers.append(
            EntityRouteUrlProvider(
                config, base_url, services=services, chunk_size=chunk_size
            )
        )

    for provider in make_providers_list(
        getattr(settings, "SITEMAP_PROVIDERS", [])
    ):
        if not isinstance(provider, UrlProvider):
            raise InvalidConfigurationError(
                f"{type(provider).__name__} in SITEMAP_PROVIDERS is not a "
                f"UrlProvider"
            )
        providers.append(provider)
    return providers


def get_sitemap_generator() -> SitemapGenerator:
    """Wire a generator from the current settings.

    Built fresh on every call, so settings overrides are always honored.
    """
    base_url = get_base_url()
    xml_writer = XmlWriter()
    return SitemapGenerator(
        registry=UrlProviderRegistry(get_providers()),
        xml_writer=xml_writer,
        index_writer=SitemapIndexWriter(xml_writer, base_url),
        use_index=get_use_index(),
        index_threshold=get_index_threshold(),
    )
