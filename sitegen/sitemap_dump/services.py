import logging
from typing import Any

from django.utils.module_loading import import_string

from sitegen.sitemap_dump.exceptions import ServiceNotFound

logger = logging.getLogger(__name__)


class ServiceLocator:
    """Hands out the services custom sitemap querysets are fetched from.

    Services are registered by key, as ready-made objects, classes, or dotted
    paths to a class or factory function. Dotted paths are imported on first
    use. Classes and imported factories are called without arguments, once.
    """

    def __init__(self, services: dict[str, Any] | None = None) -> None:
        self._definitions: dict[str, Any] = dict(services or {})
        self._instances: dict[str, Any] = {}

    def has(self, key: str) -> bool:
        return key in self._definitions

    def get(self, key: str) -> Any:
        if key in self._instances:
            return self._instances[key]
        if not self.has(key):
            raise ServiceNotFound(
                f"Service '{key}' is not registered in SITEMAP_SERVICES"
            )

        service = self._definitions[key]
        if isinstance(service, str):
            try:
                service = import_string(service)
            except ImportError as e:
                raise ServiceNotFound(
                    f"Service '{key}' can't be imported from '{service}'"
                ) from e
            service = service()
        elif isinstance(service, type):
            service = service()

        logger.debug("Loaded sitemap service '%s': %r", key, service)
        self._instances[key] = service
        return service
