import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence
from datetime import date
from functools import reduce
from operator import and_
from typing import Any

from django.apps import apps
from django.db.models import Model, Q, QuerySet
from django.urls import NoReverseMatch

from sitegen.sitemap_dump.exceptions import InvalidConfigurationError
from sitegen.sitemap_dump.services import ServiceLocator
from sitegen.sitemap_dump.types import (
    EntityRouteConfig,
    SitemapUrl,
    StaticRouteConfig,
)
from sitegen.sitemap_dump.utils import (
    parse_relative_time,
    read_property,
    reverse_path,
)

logger = logging.getLogger(__name__)

Reverser = Callable[[str, dict[str, Any]], str]


class UrlProvider(ABC):
    """A source of sitemap URLs.

    Implementations must yield their URLs lazily, pulling from whatever backs
    them as they go, and must be able to count them without iterating.
    """

    @abstractmethod
    def get_urls(self) -> Iterator[SitemapUrl]:
        """Yield the URLs of this source. Each call starts over."""

    @abstractmethod
    def count(self) -> int:
        """The number of URLs get_urls() would currently yield."""

    @abstractmethod
    def get_source_name(self) -> str:
        """A short, filename-safe name for this source."""


class StaticRouteUrlProvider(UrlProvider):
    """URLs for a fixed list of routes that take no parameters."""

    def __init__(
        self,
        configs: Sequence[StaticRouteConfig],
        base_url: str,
        reverse: Reverser = reverse_path,
    ) -> None:
        self.configs = tuple(configs)
        self.base_url = base_url.rstrip("/")
        self.reverse = reverse

    def get_urls(self) -> Iterator[SitemapUrl]:
        for config in self.configs:
            try:
                path = self.reverse(config.route, {})
            except NoReverseMatch as e:
                raise InvalidConfigurationError(
                    f"Route '{config.route}' does not exist in the URL "
                    f"configuration"
                ) from e

            last_modified = None
            if config.last_modified_relative is not None:
                # Relative to the generation run, not to startup.
                try:
                    last_modified = parse_relative_time(
                        config.last_modified_relative
                    )
                except ValueError as e:
                    raise InvalidConfigurationError(
                        f"Invalid lastmod relative time string "
                        f"'{config.last_modified_relative}' for route "
                        f"'{config.route}'"
                    ) from e

            yield SitemapUrl(
                location=f"{self.base_url}{path}",
                priority=config.priority,
                change_frequency=config.change_frequency,
                last_modified=last_modified,
            )

    def count(self) -> int:
        return len(self.configs)

    def get_source_name(self) -> str:
        return "static"


class EntityRouteUrlProvider(UrlProvider):
    """One URL per record of a model, built from a route and the record's
    properties.
    """

    def __init__(
        self,
        config: EntityRouteConfig,
        base_url: str,
        services: ServiceLocator | None = None,
        reverse: Reverser = reverse_path,
        chunk_size: int = 2000,
    ) -> None:
        self.config = config
        self.base_url = base_url.rstrip("/")
        self.services = services or ServiceLocator()
        self.reverse = reverse
        self.chunk_size = chunk_size

    def get_model(self) -> type[Model]:
        try:
            return apps.get_model(self.config.entity)
        except (LookupError, ValueError) as e:
            raise InvalidConfigurationError(
                f"Entity '{self.config.entity}' is not a valid model"
            ) from e

    def get_queryset(self) -> QuerySet:
        """Build the queryset the URLs are generated from.

        Without a `queryset_method`, this is every record of the model,
        narrowed down by the configured conditions. Otherwise the method is
        looked up on the model's default manager, or on a service when given
        as "<service id>::<method>", and called without arguments.
        """
        model = self.get_model()
        method_name = self.config.queryset_method

        if method_name is None:
            queryset = model._default_manager.all()
            if self.config.conditions:
                queryset = queryset.filter(
                    reduce(and_, map(self._as_q, self.config.conditions))
                )
            return queryset

        if "::" in method_name:
            service_key, method_name = method_name.split("::", 1)
            if not self.services.has(service_key):
                raise InvalidConfigurationError(
                    f"Service '{service_key}' does not exist in the service "
                    f"locator"
                )
            target = self.services.get(service_key)
            owner = f"service '{service_key}'"
        else:
            target = model._default_manager
            owner = f"the default manager of '{self.config.entity}'"

        method = getattr(target, method_name, None)
        if not callable(method):
            raise InvalidConfigurationError(
                f"Method '{method_name}' does not exist on {owner}"
            )

        queryset = method()
        if not isinstance(queryset, QuerySet):
            raise InvalidConfigurationError(
                f"Method '{method_name}' on {owner} must return a QuerySet, "
                f"got {type(queryset).__name__}"
            )
        return queryset

    @staticmethod
    def _as_q(condition: dict[str, Any] | Q) -> Q:
        if isinstance(condition, Q):
            return condition
        return Q(**condition)

    def get_urls(self) -> Iterator[SitemapUrl]:
        records = self.get_queryset().iterator(chunk_size=self.chunk_size)
        try:
            for record in records:
                yield self._make_url(record)
        finally:
            # Also runs when the consumer stops early.
            records.close()

    def _read(self, record: Model, path: str) -> Any:
        try:
            return read_property(record, path)
        except AttributeError as e:
            raise InvalidConfigurationError(
                f"Property '{path}' does not exist or is not readable on "
                f"entity '{self.config.entity}'"
            ) from e

    def _make_url(self, record: Model) -> SitemapUrl:
        params = {
            name: self._read(record, path)
            for name, path in self.config.route_params.items()
        }
        try:
            path = self.reverse(self.config.route, params)
        except NoReverseMatch as e:
            raise InvalidConfigurationError(
                f"Route '{self.config.route}' does not exist in the URL "
                f"configuration, or doesn't accept {sorted(params)}"
            ) from e

        last_modified = None
        if self.config.last_modified_property is not None:
            last_modified = self._read(
                record, self.config.last_modified_property
            )
            if last_modified is not None and not isinstance(
                last_modified, date
            ):
                raise InvalidConfigurationError(
                    f"Property '{self.config.last_modified_property}' on "
                    f"entity '{self.config.entity}' must be a date or a "
                    f"datetime, got {type(last_modified).__name__}"
                )

        return SitemapUrl(
            location=f"{self.base_url}{path}",
            priority=self.config.priority,
            change_frequency=self.config.change_frequency,
            last_modified=last_modified,
        )

    def count(self) -> int:
        queryset = self.get_queryset()
        if getattr(queryset, "model", None) is None:
            raise InvalidConfigurationError(
                f"QuerySet for entity '{self.config.entity}' has no model to "
                f"count"
            )
        if queryset.query.is_sliced:
            # Sliced querysets can't be reordered, but count fine as they are.
            return queryset.count()
        return queryset.order_by().count()

    def get_source_name(self) -> str:
        name = self.config.entity.rsplit(".", 1)[-1]
        return f"entity_{name.lower()}"
