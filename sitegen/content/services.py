from django.db.models import QuerySet

from sitegen.content.models import Article


class ArticleSitemapService:
    """Querysets of articles for the sitemap, fetched through the sitemap
    service locator with "articles::<method>".
    """

    def published_articles(self) -> QuerySet:
        return Article.objects.exclude(content="draft").order_by(
            "-published_at"
        )
