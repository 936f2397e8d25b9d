import logging
from collections.abc import Iterable, Iterator

from sitegen.sitemap_dump.providers import UrlProvider
from sitegen.sitemap_dump.types import SitemapUrl

logger = logging.getLogger(__name__)


class UrlProviderRegistry:
    """All the URL providers of the site, in registration order."""

    def __init__(self, providers: Iterable[UrlProvider] = ()) -> None:
        self.providers: list[UrlProvider] = []
        for provider in providers:
            self.register(provider)

    def register(self, provider: UrlProvider) -> None:
        source_name = provider.get_source_name()
        if any(p.get_source_name() == source_name for p in self.providers):
            logger.warning(
                "More than one sitemap provider uses the source name '%s'. "
                "Their sitemap files will overwrite each other in index mode.",
                source_name,
            )
        self.providers.append(provider)

    def get_all_urls(self) -> Iterator[SitemapUrl]:
        """Every provider's URLs, one provider after the other."""
        for provider in self.providers:
            yield from provider.get_urls()

    def get_all_urls_by_source(
        self,
    ) -> Iterator[tuple[str, Iterator[SitemapUrl]]]:
        """Pairs of source name and that provider's (lazy) URLs."""
        for provider in self.providers:
            yield provider.get_source_name(), provider.get_urls()

    def count(self) -> int:
        return sum(provider.count() for provider in self.providers)
