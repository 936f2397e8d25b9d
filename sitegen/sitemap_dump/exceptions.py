from django.core.exceptions import ImproperlyConfigured


class SitemapError(Exception):
    """Base class for everything that can go wrong generating a sitemap."""

    pass


class InvalidConfigurationError(SitemapError, ImproperlyConfigured):
    """Raised when the sitemap configuration can't be honored: an unknown
    route, an unreadable property, a bad custom queryset, and so on.
    """

    pass


class FileWriteError(SitemapError):
    """Raised when a sitemap file can't be written to disk."""

    pass


class SitemapExistsError(SitemapError):
    """Raised when a sitemap already exists and overwriting wasn't asked
    for.
    """

    pass


class ServiceNotFound(InvalidConfigurationError):
    """Raised when the service locator has no service for a key."""

    pass
