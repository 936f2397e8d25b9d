from collections.abc import Iterator

from django.conf import settings

from sitegen.content.models import CmsPage
from sitegen.sitemap_dump.providers import UrlProvider
from sitegen.sitemap_dump.types import ChangeFrequency, SitemapUrl
from sitegen.sitemap_dump.utils import reverse_path

# Articles live under a category that CMS pages don't have yet.
DEFAULT_ARTICLE_CATEGORY = "news"


class CmsPageUrlProvider(UrlProvider):
    """Published CMS pages, each with its own priority and change frequency.

    The route depends on the page type, so these can't be described with an
    entity route setting.
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = (base_url or settings.SITEMAP_BASE_URL).rstrip("/")

    def get_queryset(self):
        return CmsPage.objects.filter(status=CmsPage.PUBLISHED).order_by("pk")

    def get_urls(self) -> Iterator[SitemapUrl]:
        pages = self.get_queryset().iterator()
        try:
            for page in pages:
                yield SitemapUrl(
                    location=f"{self.base_url}{self.get_path(page)}",
                    priority=page.priority,
                    change_frequency=ChangeFrequency(
                        page.changefreq or ChangeFrequency.WEEKLY
                    ),
                    last_modified=page.updated_at,
                )
        finally:
            pages.close()

    @staticmethod
    def get_path(page: CmsPage) -> str:
        match page.page_type:
            case CmsPage.ARTICLE:
                return reverse_path(
                    "cms_article_show",
                    {"category": DEFAULT_ARTICLE_CATEGORY, "slug": page.slug},
                )
            case CmsPage.LANDING:
                return reverse_path("cms_landing_show", {"slug": page.slug})
            case CmsPage.PRODUCT:
                return reverse_path("cms_product_show", {"slug": page.slug})
            case _:
                return reverse_path("cms_page_show", {"slug": page.slug})

    def count(self) -> int:
        return self.get_queryset().order_by().count()

    def get_source_name(self) -> str:
        return "cms_pages"
