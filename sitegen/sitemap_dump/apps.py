from django.apps import AppConfig


class SitemapDumpConfig(AppConfig):
    name = "sitegen.sitemap_dump"

    def ready(self):
        # Register the periodic dump task, if one is configured.
        from sitegen.sitemap_dump import tasks  # noqa: F401
