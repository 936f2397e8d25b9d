from datetime import datetime, timezone

from sitegen.content.factories import ArticleFactory, CmsPageFactory
from sitegen.content.models import CmsPage
from sitegen.content.services import ArticleSitemapService
from sitegen.content.sitemap import CmsPageUrlProvider
from sitegen.sitemap_dump.types import ChangeFrequency
from sitegen.tests.cases import TestCase


class CmsPageUrlProviderTest(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        cls.updated_at = datetime(2024, 1, 10, tzinfo=timezone.utc)
        CmsPageFactory(
            slug="pricing",
            page_type=CmsPage.LANDING,
            priority=0.9,
            changefreq="daily",
            updated_at=cls.updated_at,
        )
        CmsPageFactory(slug="release-notes", page_type=CmsPage.ARTICLE)
        CmsPageFactory(slug="gadget", page_type=CmsPage.PRODUCT)
        CmsPageFactory(slug="terms", page_type=CmsPage.PAGE)
        CmsPageFactory(slug="secret", status=CmsPage.DRAFT)

    def setUp(self) -> None:
        self.provider = CmsPageUrlProvider("https://example.com/")

    def test_routes_by_page_type(self) -> None:
        """Does each page type get its own route?"""
        self.assertEqual(
            [url.location for url in self.provider.get_urls()],
            [
                "https://example.com/landing/pricing",
                "https://example.com/news/article/release-notes",
                "https://example.com/shop/gadget",
                "https://example.com/page/terms",
            ],
        )
        self.assertEqual(self.provider.count(), 4)
        self.assertEqual(self.provider.get_source_name(), "cms_pages")

    def test_page_settings(self) -> None:
        pricing, release_notes, *_ = self.provider.get_urls()
        self.assertEqual(pricing.priority, 0.9)
        self.assertEqual(pricing.change_frequency, ChangeFrequency.DAILY)
        self.assertEqual(pricing.last_modified, self.updated_at)
        self.assertEqual(
            release_notes.change_frequency, ChangeFrequency.WEEKLY
        )


class ArticleSitemapServiceTest(TestCase):
    def test_published_articles(self) -> None:
        older = ArticleFactory(
            published_at=datetime(2023, 5, 1, tzinfo=timezone.utc)
        )
        newer = ArticleFactory(
            published_at=datetime(2024, 5, 1, tzinfo=timezone.utc)
        )
        ArticleFactory(content="draft")
        self.assertEqual(
            list(ArticleSitemapService().published_articles()), [newer, older]
        )
