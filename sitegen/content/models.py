from django.db import models
from django.db.models import QuerySet


class AbstractDateTimeModel(models.Model):
    """An abstract base class for most models"""

    date_created = models.DateTimeField(
        help_text="The moment when the item was created.",
        auto_now_add=True,
        db_index=True,
    )
    date_modified = models.DateTimeField(
        help_text="The last moment when the item was modified.",
        auto_now=True,
        db_index=True,
    )

    class Meta:
        abstract = True


class Article(AbstractDateTimeModel):
    slug = models.SlugField(
        help_text="URL that the article should map to", unique=True
    )
    title = models.CharField(max_length=255)
    content = models.TextField(
        help_text="The body of the article. 'draft' for unpublished ones.",
    )
    published_at = models.DateTimeField()

    def __str__(self) -> str:
        return self.title


class Product(AbstractDateTimeModel):
    slug = models.SlugField(unique=True)
    name = models.CharField(max_length=255)
    published = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField()

    def __str__(self) -> str:
        return self.name


class SongQuerySet(QuerySet):
    def for_sitemap(self) -> "SongQuerySet":
        """Songs worth listing in the sitemap, most recently updated first."""
        return self.exclude(title="").order_by("-updated_at")

    def titles(self) -> list[str]:
        return list(self.values_list("title", flat=True))


class Song(AbstractDateTimeModel):
    slug = models.SlugField(unique=True)
    title = models.CharField(max_length=255, blank=True)
    updated_at = models.DateTimeField()

    objects = SongQuerySet.as_manager()

    def __str__(self) -> str:
        return self.title or self.slug


class CmsPage(AbstractDateTimeModel):
    ARTICLE = "article"
    LANDING = "landing"
    PRODUCT = "product"
    PAGE = "page"
    PAGE_TYPES = (
        (ARTICLE, "Article"),
        (LANDING, "Landing page"),
        (PRODUCT, "Product page"),
        (PAGE, "Plain page"),
    )
    DRAFT = "draft"
    PUBLISHED = "published"
    STATUSES = (
        (DRAFT, "Draft"),
        (PUBLISHED, "Published"),
    )

    slug = models.SlugField(unique=True)
    title = models.CharField(max_length=255)
    page_type = models.CharField(
        max_length=20, choices=PAGE_TYPES, default=PAGE
    )
    status = models.CharField(
        max_length=20, choices=STATUSES, default=DRAFT, db_index=True
    )
    priority = models.FloatField(default=0.5)
    changefreq = models.CharField(
        help_text="The sitemap change frequency, weekly when blank",
        max_length=10,
        blank=True,
    )
    updated_at = models.DateTimeField()

    def __str__(self) -> str:
        return self.title
