import logging
import os
from pathlib import Path
from typing import Literal

from sitegen.sitemap_dump.exceptions import SitemapExistsError
from sitegen.sitemap_dump.index_writer import SitemapIndexWriter
from sitegen.sitemap_dump.registry import UrlProviderRegistry
from sitegen.sitemap_dump.xml_writer import XmlWriter

logger = logging.getLogger(__name__)

UseIndex = bool | Literal["auto"]

INDEX_FILENAME = "sitemap.xml"


class SitemapGenerator:
    """Turns the registered providers into a sitemap, choosing between a
    single <urlset> and a sharded <sitemapindex>.
    """

    def __init__(
        self,
        registry: UrlProviderRegistry,
        xml_writer: XmlWriter,
        index_writer: SitemapIndexWriter,
        use_index: UseIndex = "auto",
        index_threshold: int = 50_000,
    ) -> None:
        self.registry = registry
        self.xml_writer = xml_writer
        self.index_writer = index_writer
        self.use_index = use_index
        self.index_threshold = index_threshold

    def count_urls(self) -> int:
        return self.registry.count()

    def should_use_index(self) -> bool:
        if self.use_index is True:
            return True
        if self.use_index is False:
            return False

        # Strictly above: a site with exactly `index_threshold` URLs stays
        # in a single file.
        count = self.count_urls()
        use_index = count > self.index_threshold
        logger.info(
            "Found %s sitemap URLs (threshold: %s), using %s.",
            count,
            self.index_threshold,
            "a sitemap index" if use_index else "a single sitemap",
        )
        return use_index

    def generate(self) -> str:
        """Generate the sitemap in memory.

        :return: The sitemap index document in index mode, the urlset
        otherwise
        """
        if self.should_use_index():
            result = self.index_writer.write(
                self.registry.get_all_urls_by_source()
            )
            return result["index"]

        return self.xml_writer.write(self.registry.get_all_urls())

    def generate_to_file(
        self, path: str | os.PathLike, force: bool = False
    ) -> None:
        """Write the sitemap to `path`.

        In index mode, `path` gets the index and the shards are written next
        to it.

        :raises SitemapExistsError: If `path` exists and `force` is False
        :raises FileWriteError: If a file can't be written
        """
        path = Path(path)
        if not force and path.exists():
            raise SitemapExistsError(f"File already exists: {path}")

        if self.should_use_index():
            self.index_writer.write_to_directory(
                self.registry.get_all_urls_by_source(),
                path.parent,
                index_filename=path.name,
            )
            return

        count = self.xml_writer.write_to_file(
            self.registry.get_all_urls(), path
        )
        logger.info("Wrote %s URLs to %s", count, path)

    def generate_to_directory(
        self, directory: str | os.PathLike, force: bool = False
    ) -> Path:
        """Write sitemap.xml, and any shards, into `directory`.

        :return: The path of sitemap.xml
        """
        path = Path(directory) / INDEX_FILENAME
        self.generate_to_file(path, force=force)
        return path
