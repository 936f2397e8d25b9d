import environ

from ..django import INSTALL_ROOT

env = environ.FileAwareEnv()

# Absolute URL prefixed to every path the router returns
SITEMAP_BASE_URL = env("SITEMAP_BASE_URL", default="http://localhost:8000")

# "auto" switches to a sitemap index once the URL count is above the
# threshold; "true" and "false" force one format or the other.
SITEMAP_USE_INDEX = env("SITEMAP_USE_INDEX", default="auto")
SITEMAP_INDEX_THRESHOLD = env.int("SITEMAP_INDEX_THRESHOLD", default=50_000)

# Where `manage.py dump_sitemap` writes its files by default
SITEMAP_PUBLIC_DIR = env(
    "SITEMAP_PUBLIC_DIR", default=str(INSTALL_ROOT / "public")
)

# Rows fetched per database round trip when streaming entities
SITEMAP_ITERATOR_CHUNK_SIZE = env.int(
    "SITEMAP_ITERATOR_CHUNK_SIZE", default=2000
)

# Regenerate the sitemap files in a celery task, if > 0
SITEMAP_TASK_REPEAT_SEC = env.int("SITEMAP_TASK_REPEAT_SEC", default=0)

SITEMAP_STATIC_ROUTES = [
    {"route": "home", "priority": 1.0, "changefreq": "daily"},
    {
        "route": "about",
        "priority": 0.8,
        "changefreq": "weekly",
        "lastmod": "-1 week",
    },
    {"route": "contact", "priority": 0.5, "changefreq": "monthly"},
]

SITEMAP_ENTITY_ROUTES = [
    {
        "entity": "content.Article",
        "route": "article_show",
        "route_params": {"slug": "slug"},
        "priority": 0.7,
        "changefreq": "weekly",
        "lastmod_property": "published_at",
        "queryset_method": "articles::published_articles",
    },
    {
        "entity": "content.Product",
        "route": "product_show",
        "route_params": {"slug": "slug"},
        "priority": 0.6,
        "changefreq": "daily",
        "lastmod_property": "created_at",
        "conditions": [{"published": True}],
    },
    {
        "entity": "content.Song",
        "route": "song_show",
        "route_params": {"slug": "slug"},
        "priority": 0.5,
        "changefreq": "monthly",
        "lastmod_property": "updated_at",
        "queryset_method": "for_sitemap",
    },
]

# Services that custom querysets can be fetched from, with the
# "<service id>::<method>" form of `queryset_method`
SITEMAP_SERVICES = {
    "articles": "sitegen.content.services.ArticleSitemapService",
}

# Extra providers, instantiated without arguments
SITEMAP_PROVIDERS = [
    "sitegen.content.sitemap.CmsPageUrlProvider",
]
