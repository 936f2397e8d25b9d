import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest import mock

import time_machine

from sitegen.sitemap_dump.exceptions import FileWriteError
from sitegen.sitemap_dump.index_writer import (
    SITEMAP_MAX_URLS,
    SitemapIndexWriter,
    chunk_urls,
    make_filename,
)
from sitegen.sitemap_dump.tests.fakes import FakeUrlProvider
from sitegen.sitemap_dump.xml_writer import XmlWriter
from sitegen.tests.cases import SimpleTestCase

FROZEN_NOW = datetime(2024, 1, 15, 12, 0, 0, 123456, tzinfo=timezone.utc)


def by_source(*providers):
    return [(p.get_source_name(), p.get_urls()) for p in providers]


class ChunkUrlsTest(SimpleTestCase):
    def chunk_sizes(self, total: int) -> list[tuple[int, int, bool]]:
        return [
            (number, len(chunk), is_last)
            for number, chunk, is_last in chunk_urls(range(total))
        ]

    def test_boundaries(self) -> None:
        """Does a chunk only fill up to the protocol limit?"""
        tests = (
            (0, []),
            (1, [(1, 1, True)]),
            (SITEMAP_MAX_URLS, [(1, SITEMAP_MAX_URLS, True)]),
            (
                SITEMAP_MAX_URLS + 1,
                [(1, SITEMAP_MAX_URLS, False), (2, 1, True)],
            ),
            (
                150_000,
                [
                    (1, SITEMAP_MAX_URLS, False),
                    (2, SITEMAP_MAX_URLS, False),
                    (3, SITEMAP_MAX_URLS, True),
                ],
            ),
        )
        for total, expected in tests:
            with self.subTest(total=total):
                self.assertEqual(self.chunk_sizes(total), expected)

    def test_small_chunks(self) -> None:
        chunks = [chunk for _, chunk, _ in chunk_urls(range(7), size=3)]
        self.assertEqual(chunks, [[0, 1, 2], [3, 4, 5], [6]])

    def test_filenames(self) -> None:
        self.assertEqual(
            make_filename("static", 1, True), "sitemap_static.xml"
        )
        self.assertEqual(
            make_filename("entity_article", 1, False),
            "sitemap_entity_article_1.xml",
        )
        self.assertEqual(
            make_filename("entity_article", 3, True),
            "sitemap_entity_article_3.xml",
        )


@time_machine.travel(FROZEN_NOW, tick=False)
class SitemapIndexWriterTest(SimpleTestCase):
    def setUp(self) -> None:
        self.writer = SitemapIndexWriter(XmlWriter(), "https://example.com/")

    def test_write(self) -> None:
        """Does each non-empty source get its own sitemap in the index?"""
        result = self.writer.write(
            by_source(
                FakeUrlProvider("static", 3),
                FakeUrlProvider("entity_article", 0),
                FakeUrlProvider("entity_product", 2),
            )
        )

        self.assertEqual(
            list(result["sitemaps"]),
            ["sitemap_static.xml", "sitemap_entity_product.xml"],
        )
        self.assert_sitemap_content(
            [("//s:url", 3)], result["sitemaps"]["sitemap_static.xml"]
        )
        self.assert_sitemap_content(
            [
                ("/s:sitemapindex", 1),
                ("//s:sitemap", 2),
                ("//s:sitemap/s:lastmod", 2),
            ],
            result["index"],
        )
        self.assertEqual(
            self.get_locations(result["index"]),
            [
                "https://example.com/sitemap_static.xml",
                "https://example.com/sitemap_entity_product.xml",
            ],
        )
        self.assertIn(
            "<lastmod>2024-01-15T12:00:00+00:00</lastmod>", result["index"]
        )

    def test_write_nothing(self) -> None:
        result = self.writer.write(by_source(FakeUrlProvider("static", 0)))
        self.assertEqual(result["sitemaps"], {})
        self.assert_sitemap_content(
            [("/s:sitemapindex", 1), ("//s:sitemap", 0)], result["index"]
        )

    def test_write_to_directory_splits_large_sources(self) -> None:
        """Is a source above the protocol limit split into numbered files?"""
        with tempfile.TemporaryDirectory() as directory:
            filenames = self.writer.write_to_directory(
                by_source(
                    FakeUrlProvider("static", 2),
                    FakeUrlProvider("entity_song", SITEMAP_MAX_URLS + 1),
                ),
                directory,
            )

            self.assertEqual(
                filenames,
                [
                    "sitemap_static.xml",
                    "sitemap_entity_song_1.xml",
                    "sitemap_entity_song_2.xml",
                ],
            )
            self.assertEqual(
                sorted(p.name for p in Path(directory).iterdir()),
                sorted(filenames + ["sitemap.xml"]),
            )
            first = (Path(directory) / "sitemap_entity_song_1.xml").read_text()
            self.assertEqual(first.count("<url>"), SITEMAP_MAX_URLS)
            second = Path(directory) / "sitemap_entity_song_2.xml"
            self.assert_sitemap_content(
                [("//s:url", 1)], second.read_bytes()
            )
            self.assertEqual(
                self.get_locations(second.read_bytes()),
                [f"https://example.com/entity_song/{SITEMAP_MAX_URLS}"],
            )
            self.assertEqual(
                self.get_locations(
                    (Path(directory) / "sitemap.xml").read_bytes()
                ),
                [f"https://example.com/{name}" for name in filenames],
            )

    def test_custom_index_filename(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            self.writer.write_to_directory(
                by_source(FakeUrlProvider("static", 1)),
                directory,
                index_filename="index.xml",
            )
            self.assertTrue((Path(directory) / "index.xml").exists())
            self.assertFalse((Path(directory) / "sitemap.xml").exists())

    def test_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            missing = Path(directory) / "missing"
            with self.assertRaises(FileWriteError):
                self.writer.write_to_directory(
                    by_source(FakeUrlProvider("static", 1)), missing
                )
            self.assertFalse(missing.exists())

    def test_unwritable_index(self) -> None:
        """Is a failure on the index reported after the shards are written?"""
        with tempfile.TemporaryDirectory() as directory:
            with self.assertRaisesMessage(
                FileWriteError, "Cannot write index file"
            ):
                self.writer.write_to_directory(
                    by_source(FakeUrlProvider("static", 1)),
                    directory,
                    index_filename="missing/sitemap.xml",
                )
            self.assertTrue((Path(directory) / "sitemap_static.xml").exists())


class IndexTimestampTest(SimpleTestCase):
    def setUp(self) -> None:
        self.writer = SitemapIndexWriter(XmlWriter(), "https://example.com")
        start = datetime(2024, 1, 15, 12, tzinfo=timezone.utc)
        self.moments = (start + timedelta(seconds=i) for i in range(10))

    def assert_one_timestamp(self, index: str, mock_now) -> None:
        mock_now.assert_called_once()
        self.assertEqual(index.count("2024-01-15T12:00:00+00:00"), 3)
        self.assertNotIn("2024-01-15T12:00:01+00:00", index)

    def test_write(self) -> None:
        """Do all the shards of a run share one timestamp?"""
        with mock.patch(
            "sitegen.sitemap_dump.index_writer.now",
            side_effect=self.moments,
        ) as mock_now:
            result = self.writer.write(
                by_source(
                    FakeUrlProvider("static", 1),
                    FakeUrlProvider("entity_article", 1),
                    FakeUrlProvider("entity_song", 1),
                )
            )
        self.assert_one_timestamp(result["index"], mock_now)

    def test_write_to_directory(self) -> None:
        with tempfile.TemporaryDirectory() as directory:
            with mock.patch(
                "sitegen.sitemap_dump.index_writer.now",
                side_effect=self.moments,
            ) as mock_now:
                self.writer.write_to_directory(
                    by_source(
                        FakeUrlProvider("static", 1),
                        FakeUrlProvider("entity_article", 1),
                        FakeUrlProvider("entity_song", 1),
                    ),
                    directory,
                )
            index = (Path(directory) / "sitemap.xml").read_text()
        self.assert_one_timestamp(index, mock_now)
