import time
from pathlib import Path

from django.conf import settings
from django.core.management import CommandError
from django.core.management.base import CommandParser

from sitegen.lib.command_utils import VerboseCommand, logger
from sitegen.sitemap_dump.conf import get_sitemap_generator
from sitegen.sitemap_dump.exceptions import SitemapError


class Command(VerboseCommand):
    help = """Generate sitemap.xml, or a sitemap index and its sitemap files,
    into the public directory or the one given with --output."""

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "-o",
            "--output",
            type=str,
            required=False,
            help="The directory to write the sitemap files to, absolute or "
            "relative to SITEMAP_PUBLIC_DIR. Created if it doesn't exist.",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            required=False,
            help="Overwrite an existing sitemap.xml",
        )
        parser.add_argument(
            "--count",
            action="store_true",
            required=False,
            help="Only print how many URLs the sitemap would have",
        )

    def handle(self, *args, **options):
        super().handle(*args, **options)

        public_dir = Path(settings.SITEMAP_PUBLIC_DIR)
        directory = public_dir
        if options["output"]:
            # An absolute path replaces the public dir when joined.
            directory = public_dir / options["output"]

        try:
            generator = get_sitemap_generator()
            if options["count"]:
                count = generator.count_urls()
                self.stdout.write(f"{count} URLs")
                return

            directory.mkdir(parents=True, exist_ok=True)
            start = time.monotonic()
            path = generator.generate_to_directory(
                directory, force=options["force"]
            )
        except (SitemapError, OSError) as e:
            logger.error("Failed to generate sitemap: %s", e)
            raise CommandError(f"Failed to generate sitemap: {e}") from e

        logger.info(
            "Sitemap generated in %.2f seconds: %s",
            time.monotonic() - start,
            path,
        )
