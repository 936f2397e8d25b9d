import logging
import os
from collections.abc import Iterable, Iterator
from datetime import datetime
from pathlib import Path

from django.utils.timezone import now
from lxml import etree

from sitegen.sitemap_dump.exceptions import FileWriteError
from sitegen.sitemap_dump.types import (
    SitemapFileEntry,
    SitemapIndexResult,
    SitemapUrl,
)
from sitegen.sitemap_dump.xml_writer import (
    INDENT,
    SITEMAP_NAMESPACE,
    XML_DECLARATION,
    XmlWriter,
)

logger = logging.getLogger(__name__)

# The sitemap protocol's hard limit of URLs per file. Not configurable.
SITEMAP_MAX_URLS = 50_000

UrlsBySource = Iterable[tuple[str, Iterable[SitemapUrl]]]


def chunk_urls(
    urls: Iterable[SitemapUrl], size: int = SITEMAP_MAX_URLS
) -> Iterator[tuple[int, list[SitemapUrl], bool]]:
    """Split URLs into consecutive chunks of at most `size` items.

    A full chunk is only handed out once the next URL shows up, so every
    chunk comes with a flag saying whether it's the last one. Nothing is
    yielded for an empty source.

    :return: Tuples of (1-based chunk number, URLs, is last chunk)
    """
    chunk: list[SitemapUrl] = []
    number = 0
    for url in urls:
        if len(chunk) == size:
            number += 1
            yield number, chunk, False
            chunk = []
        chunk.append(url)

    if chunk:
        number += 1
        yield number, chunk, True


def make_filename(source_name: str, number: int, is_last: bool) -> str:
    if number == 1 and is_last:
        return f"sitemap_{source_name}.xml"
    return f"sitemap_{source_name}_{number}.xml"


def format_timestamp(moment: datetime) -> str:
    return moment.replace(microsecond=0).isoformat()


class SitemapIndexWriter:
    """Shards each source's URLs into sitemap files and writes the
    <sitemapindex> that points to them.
    """

    def __init__(self, xml_writer: XmlWriter, base_url: str) -> None:
        self.xml_writer = xml_writer
        self.base_url = base_url.rstrip("/")

    def _iter_chunks(
        self, urls_by_source: UrlsBySource
    ) -> Iterator[tuple[str, list[SitemapUrl]]]:
        for source_name, urls in urls_by_source:
            for number, chunk, is_last in chunk_urls(urls):
                filename = make_filename(source_name, number, is_last)
                logger.debug(
                    "Flushing chunk %s of source '%s' (%s URLs) as %s",
                    number,
                    source_name,
                    len(chunk),
                    filename,
                )
                yield filename, chunk

    def _make_entry(
        self, filename: str, generated_at: datetime
    ) -> SitemapFileEntry:
        return {
            "location": f"{self.base_url}/{filename}",
            "last_modified": generated_at,
        }

    def write(self, urls_by_source: UrlsBySource) -> SitemapIndexResult:
        """Build the index and every shard in memory."""
        generated_at = now()
        entries: list[SitemapFileEntry] = []
        sitemaps: dict[str, str] = {}
        for filename, chunk in self._iter_chunks(urls_by_source):
            sitemaps[filename] = self.xml_writer.write(chunk)
            entries.append(self._make_entry(filename, generated_at))

        return {"index": self.write_index(entries), "sitemaps": sitemaps}

    def write_to_directory(
        self,
        urls_by_source: UrlsBySource,
        directory: str | os.PathLike,
        index_filename: str = "sitemap.xml",
    ) -> list[str]:
        """Write each shard into `directory`, then the index.

        The directory must already exist.

        :return: The filenames of the shards, in index order
        :raises FileWriteError: If a shard or the index can't be written
        """
        directory = Path(directory)
        generated_at = now()
        entries: list[SitemapFileEntry] = []
        filenames: list[str] = []
        for filename, chunk in self._iter_chunks(urls_by_source):
            count = self.xml_writer.write_to_file(chunk, directory / filename)
            logger.info("Wrote %s URLs to %s", count, directory / filename)
            entries.append(self._make_entry(filename, generated_at))
            filenames.append(filename)

        index_path = directory / index_filename
        try:
            index_path.write_text(self.write_index(entries), encoding="utf-8")
        except OSError as e:
            raise FileWriteError(
                f"Cannot write index file: {index_path}"
            ) from e
        logger.info(
            "Wrote sitemap index with %s sitemaps to %s",
            len(entries),
            index_path,
        )
        return filenames

    @staticmethod
    def write_index(entries: Iterable[SitemapFileEntry]) -> str:
        ns = f"{{{SITEMAP_NAMESPACE}}}"
        root = etree.Element(
            f"{ns}sitemapindex", nsmap={None: SITEMAP_NAMESPACE}
        )
        for entry in entries:
            sitemap = etree.SubElement(root, f"{ns}sitemap")
            etree.SubElement(sitemap, f"{ns}loc").text = entry["location"]
            etree.SubElement(sitemap, f"{ns}lastmod").text = format_timestamp(
                entry["last_modified"]
            )
        etree.indent(root, space=INDENT)
        xml = etree.tostring(root, encoding="unicode")
        return f"{XML_DECLARATION}{xml}\n"
