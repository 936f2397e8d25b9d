import io
import logging
import os
from collections.abc import Iterable
from datetime import date
from typing import TextIO

from lxml import etree

from sitegen.sitemap_dump.exceptions import FileWriteError
from sitegen.sitemap_dump.types import SitemapUrl

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
INDENT = "  "


def format_priority(priority: float) -> str:
    """Render a priority the short way: 1 rather than 1.0, 0.8 as is."""
    priority = float(priority)
    if priority.is_integer():
        return str(int(priority))
    return repr(priority)


def format_date(value: date) -> str:
    """Render a date or datetime as a calendar date, dropping any time."""
    return value.strftime("%Y-%m-%d")


class XmlWriter:
    """Serializes sitemap URLs into a <urlset> document.

    URLs are pulled one at a time and written out before the next one is
    requested, so a sitemap written to a file never has more than one URL in
    memory, however large the source.
    """

    def write(self, urls: Iterable[SitemapUrl]) -> str:
        buffer = io.StringIO()
        self.stream(urls, buffer)
        return buffer.getvalue()

    def write_to_file(
        self, urls: Iterable[SitemapUrl], path: str | os.PathLike
    ) -> int:
        """Stream the sitemap straight into the file at `path`.

        :return: The number of URLs written
        :raises FileWriteError: If the file can't be written
        """
        try:
            with open(path, "w", encoding="utf-8") as f:
                count = self.stream(urls, f)
        except OSError as e:
            raise FileWriteError(f"Cannot write to file: {path}") from e
        logger.debug("Wrote %s URLs to %s", count, path)
        return count

    def stream(self, urls: Iterable[SitemapUrl], out: TextIO) -> int:
        out.write(XML_DECLARATION)
        out.write(f'<urlset xmlns="{SITEMAP_NAMESPACE}">\n')
        count = 0
        for url in urls:
            out.write(f"{INDENT}{self.render_url(url)}\n")
            count += 1
        out.write("</urlset>\n")
        return count

    @staticmethod
    def render_url(url: SitemapUrl) -> str:
        row = etree.Element("url")
        etree.SubElement(row, "loc").text = url.location
        if url.last_modified is not None:
            etree.SubElement(row, "lastmod").text = format_date(
                url.last_modified
            )
        etree.SubElement(row, "changefreq").text = url.change_frequency.value
        etree.SubElement(row, "priority").text = format_priority(url.priority)
        etree.indent(row, space=INDENT, level=1)
        return etree.tostring(row, encoding="unicode")
