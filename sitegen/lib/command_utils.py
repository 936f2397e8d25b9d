import logging

from django.core.management import BaseCommand

logger = logging.getLogger(__name__)


class VerboseCommand(BaseCommand):
    def handle(self, *args, **options):
        verbosity = options.get("verbosity")
        sitegen_logger = logging.getLogger("sitegen")
        if not verbosity:
            sitegen_logger.setLevel(logging.WARN)
        elif verbosity == 1:  # default
            sitegen_logger.setLevel(logging.INFO)
        elif verbosity > 1:
            sitegen_logger.setLevel(logging.DEBUG)
