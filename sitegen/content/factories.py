from datetime import timezone

from factory import Faker, LazyAttribute, Sequence
from factory.django import DjangoModelFactory
from factory.fuzzy import FuzzyChoice

from sitegen.content.models import Article, CmsPage, Product, Song


class ArticleFactory(DjangoModelFactory):
    class Meta:
        model = Article

    slug = Sequence(lambda n: f"article-{n}")
    title = Faker("sentence", nb_words=5)
    content = Faker("paragraph")
    published_at = Faker("date_time_this_decade", tzinfo=timezone.utc)


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    slug = Sequence(lambda n: f"product-{n}")
    name = Faker("catch_phrase")
    published = True
    created_at = Faker("date_time_this_decade", tzinfo=timezone.utc)


class SongFactory(DjangoModelFactory):
    class Meta:
        model = Song

    slug = Sequence(lambda n: f"song-{n}")
    title = Faker("sentence", nb_words=3)
    updated_at = Faker("date_time_this_decade", tzinfo=timezone.utc)


class CmsPageFactory(DjangoModelFactory):
    class Meta:
        model = CmsPage

    slug = Sequence(lambda n: f"page-{n}")
    title = LazyAttribute(lambda page: page.slug.replace("-", " ").title())
    page_type = FuzzyChoice(CmsPage.PAGE_TYPES, getter=lambda c: c[0])
    status = CmsPage.PUBLISHED
    priority = 0.5
    changefreq = ""
    updated_at = Faker("date_time_this_decade", tzinfo=timezone.utc)
