import logging
from pathlib import Path

from django.conf import settings

from sitegen.celery_init import app
from sitegen.sitemap_dump.conf import get_sitemap_generator

logger = logging.getLogger(__name__)


@app.task(name="sitemaps.tasks.DumpSitemap", ignore_result=True)
def dump_sitemap_task() -> None:
    """Regenerate the sitemap files in the public directory."""
    directory = Path(settings.SITEMAP_PUBLIC_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    path = get_sitemap_generator().generate_to_directory(directory, force=True)
    logger.info("Regenerated the sitemap at %s", path)


if settings.SITEMAP_TASK_REPEAT_SEC:
    # on_after_configure is sent before this module is discovered
    # by autodiscover_tasks(), so hook into on_after_finalize instead.
    @app.on_after_finalize.connect
    def setup_periodic_tasks(sender, **kwargs):
        sender.add_periodic_task(
            settings.SITEMAP_TASK_REPEAT_SEC,
            dump_sitemap_task,
            name="sitemaps.tasks.DumpSitemap-periodic",
        )
