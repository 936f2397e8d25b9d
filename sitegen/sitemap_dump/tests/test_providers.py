from datetime import date, datetime, timezone
from unittest import mock

import time_machine
from django.db.models import Q

from sitegen.content.factories import (
    ArticleFactory,
    ProductFactory,
    SongFactory,
)
from sitegen.content.models import Article, Song
from sitegen.sitemap_dump.exceptions import InvalidConfigurationError
from sitegen.sitemap_dump.providers import (
    EntityRouteUrlProvider,
    StaticRouteUrlProvider,
)
from sitegen.sitemap_dump.services import ServiceLocator
from sitegen.sitemap_dump.types import (
    ChangeFrequency,
    EntityRouteConfig,
    StaticRouteConfig,
)
from sitegen.tests.cases import SimpleTestCase, TestCase

BASE_URL = "https://example.com"


def static_config(route: str, **kwargs) -> StaticRouteConfig:
    kwargs.setdefault("priority", 0.5)
    kwargs.setdefault("change_frequency", ChangeFrequency.WEEKLY)
    return StaticRouteConfig(route=route, **kwargs)


def entity_config(entity: str, route: str, **kwargs) -> EntityRouteConfig:
    kwargs.setdefault("route_params", {"slug": "slug"})
    kwargs.setdefault("priority", 0.5)
    kwargs.setdefault("change_frequency", ChangeFrequency.WEEKLY)
    return EntityRouteConfig(entity=entity, route=route, **kwargs)


class StaticRouteUrlProviderTest(SimpleTestCase):
    @time_machine.travel(datetime(2024, 1, 15, 12, tzinfo=timezone.utc))
    def test_get_urls(self) -> None:
        provider = StaticRouteUrlProvider(
            [
                static_config(
                    "home",
                    priority=1.0,
                    change_frequency=ChangeFrequency.DAILY,
                ),
                static_config("about", last_modified_relative="-1 week"),
            ],
            BASE_URL + "/",
        )

        urls = list(provider.get_urls())

        self.assertEqual(
            [url.location for url in urls],
            ["https://example.com/", "https://example.com/about"],
        )
        self.assertEqual(urls[0].priority, 1.0)
        self.assertEqual(urls[0].change_frequency, ChangeFrequency.DAILY)
        self.assertIsNone(urls[0].last_modified)
        self.assertEqual(urls[1].last_modified.date(), date(2024, 1, 8))

    def test_count_and_source_name(self) -> None:
        provider = StaticRouteUrlProvider(
            [static_config("home"), static_config("contact")], BASE_URL
        )
        self.assertEqual(provider.count(), 2)
        self.assertEqual(provider.get_source_name(), "static")

    def test_unknown_route(self) -> None:
        provider = StaticRouteUrlProvider(
            [static_config("no_such_route")], BASE_URL
        )
        with self.assertRaisesMessage(
            InvalidConfigurationError, "Route 'no_such_route' does not exist"
        ):
            list(provider.get_urls())

    def test_bad_relative_time(self) -> None:
        provider = StaticRouteUrlProvider(
            [static_config("home", last_modified_relative="whenever, really")],
            BASE_URL,
        )
        with self.assertRaisesMessage(
            InvalidConfigurationError, "Invalid lastmod relative time string"
        ):
            list(provider.get_urls())

    def test_custom_reverser(self) -> None:
        """Can the router be swapped out?"""
        reverse = mock.Mock(return_value="/custom")
        provider = StaticRouteUrlProvider(
            [static_config("anything")], BASE_URL, reverse=reverse
        )
        urls = list(provider.get_urls())
        reverse.assert_called_once_with("anything", {})
        self.assertEqual(urls[0].location, "https://example.com/custom")


class ArticleService:
    def published_articles(self):
        return Article.objects.exclude(content="draft")

    def first_article_titles(self):
        return ["Not", "a", "queryset"]


class SlicedSongService:
    def latest_songs(self):
        return Song.objects.order_by("-updated_at")[:2]


class EntityRouteUrlProviderTest(TestCase):
    @classmethod
    def setUpTestData(cls) -> None:
        cls.article = ArticleFactory(
            slug="hello-world",
            published_at=datetime(2024, 1, 10, 9, tzinfo=timezone.utc),
        )
        cls.draft = ArticleFactory(slug="draft-article", content="draft")
        cls.product = ProductFactory(slug="widget", published=True)
        ProductFactory(slug="prototype", published=False)
        cls.song = SongFactory(
            slug="recent-song",
            updated_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
        )
        SongFactory(
            slug="older-song",
            updated_at=datetime(2023, 1, 2, tzinfo=timezone.utc),
        )
        SongFactory(slug="untitled-song", title="")

    def make_provider(self, config: EntityRouteConfig, **kwargs):
        kwargs.setdefault(
            "services",
            ServiceLocator(
                {"articles": ArticleService(), "songs": SlicedSongService}
            ),
        )
        return EntityRouteUrlProvider(config, BASE_URL, **kwargs)

    def test_every_record(self) -> None:
        """Without conditions, is every record of the model listed?"""
        provider = self.make_provider(
            entity_config(
                "content.Article",
                "article_show",
                priority=0.7,
                last_modified_property="published_at",
            )
        )
        urls = {url.location: url for url in provider.get_urls()}

        self.assertEqual(
            set(urls),
            {
                "https://example.com/blog/hello-world",
                "https://example.com/blog/draft-article",
            },
        )
        url = urls["https://example.com/blog/hello-world"]
        self.assertEqual(url.priority, 0.7)
        self.assertEqual(url.last_modified, self.article.published_at)
        self.assertEqual(provider.count(), 2)
        self.assertEqual(provider.get_source_name(), "entity_article")

    def test_conditions(self) -> None:
        provider = self.make_provider(
            entity_config(
                "content.Product",
                "product_show",
                conditions=({"published": True},),
            )
        )
        self.assertEqual(
            [url.location for url in provider.get_urls()],
            ["https://example.com/product/widget"],
        )
        self.assertEqual(provider.count(), 1)

    def test_q_conditions_are_combined(self) -> None:
        provider = self.make_provider(
            entity_config(
                "content.Product",
                "product_show",
                conditions=(Q(published=False), {"slug": "widget"}),
            )
        )
        self.assertEqual(list(provider.get_urls()), [])
        self.assertEqual(provider.count(), 0)

    def test_manager_method(self) -> None:
        """Is a queryset_method looked up on the default manager?"""
        provider = self.make_provider(
            entity_config(
                "content.Song", "song_show", queryset_method="for_sitemap"
            )
        )
        self.assertEqual(
            [url.location for url in provider.get_urls()],
            [
                "https://example.com/song/recent-song",
                "https://example.com/song/older-song",
            ],
        )
        self.assertEqual(provider.count(), 2)

    def test_service_method(self) -> None:
        provider = self.make_provider(
            entity_config(
                "content.Article",
                "article_show",
                queryset_method="articles::published_articles",
            )
        )
        self.assertEqual(
            [url.location for url in provider.get_urls()],
            ["https://example.com/blog/hello-world"],
        )
        self.assertEqual(provider.count(), 1)

    def test_sliced_queryset_count(self) -> None:
        provider = self.make_provider(
            entity_config(
                "content.Song",
                "song_show",
                queryset_method="songs::latest_songs",
            )
        )
        self.assertEqual(provider.count(), 2)
        self.assertEqual(len(list(provider.get_urls())), 2)

    def test_configuration_errors(self) -> None:
        """Are the broken configurations reported with a clear message?"""
        tests = (
            (
                entity_config("content.Nothing", "song_show"),
                "Entity 'content.Nothing' is not a valid model",
            ),
            (
                entity_config(
                    "content.Song", "song_show", queryset_method="missing"
                ),
                "Method 'missing' does not exist",
            ),
            (
                entity_config(
                    "content.Song", "song_show", queryset_method="titles"
                ),
                "must return a QuerySet, got list",
            ),
            (
                entity_config(
                    "content.Article",
                    "article_show",
                    queryset_method="nope::published_articles",
                ),
                "Service 'nope' does not exist",
            ),
            (
                entity_config(
                    "content.Article",
                    "article_show",
                    queryset_method="articles::first_article_titles",
                ),
                "must return a QuerySet",
            ),
        )
        for config, message in tests:
            with self.subTest(config=config):
                provider = self.make_provider(config)
                with self.assertRaisesMessage(
                    InvalidConfigurationError, message
                ):
                    provider.count()
                with self.assertRaisesMessage(
                    InvalidConfigurationError, message
                ):
                    list(provider.get_urls())

    def test_record_errors(self) -> None:
        tests = (
            (
                entity_config(
                    "content.Song", "song_show", route_params={"slug": "isrc"}
                ),
                "Property 'isrc' does not exist",
            ),
            (
                entity_config(
                    "content.Song",
                    "song_show",
                    last_modified_property="title",
                ),
                "must be a date or a datetime, got str",
            ),
            (
                entity_config("content.Song", "no_such_route"),
                "Route 'no_such_route' does not exist",
            ),
        )
        for config, message in tests:
            with self.subTest(config=config):
                with self.assertRaisesMessage(
                    InvalidConfigurationError, message
                ):
                    list(self.make_provider(config).get_urls())

    def test_cursor_is_released_when_stopping_early(self) -> None:
        provider = self.make_provider(
            entity_config("content.Song", "song_show")
        )
        urls = provider.get_urls()
        next(urls)
        urls.close()
        # A fresh iteration starts over from the first record.
        self.assertEqual(len(list(provider.get_urls())), 3)
