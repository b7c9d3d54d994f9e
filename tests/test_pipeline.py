"""Integration tests for llmstxt.pipeline: one full generation run."""

import asyncio
import logging
from pathlib import Path
from unittest.mock import patch

from llmstxt import writers
from llmstxt.config import LlmsConfig
from llmstxt.models import ContentItem
from llmstxt.pipeline import generate_llms_files, generate_llms_files_sync


def _item(url: str, title: str | None, body: object = None, **metadata: object) -> ContentItem:
    if title is not None:
        metadata["title"] = title
    text = body if body is not None else f"{title} body"

    async def source() -> object:
        if isinstance(text, Exception):
            raise text
        return text

    return ContentItem(
        input_path=f"./{url.strip('/').removesuffix('.html') or 'index'}.md",
        url=url,
        metadata=metadata,
        body_source=source,
    )


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8-sig")


CONFIG = LlmsConfig(header_text="# Site", site_url="https://x.test")


class TestGenerate:
    def test_writes_both_artifacts(self, tmp_path: Path):
        items = [_item("/a.html", "A"), _item("/b.html", "B")]
        report = generate_llms_files_sync(items, tmp_path, CONFIG)

        assert _read(tmp_path / "llms.txt") == (
            "# Site\n- [B](https://x.test/b)\n- [A](https://x.test/a)\n"
        )
        assert _read(tmp_path / "llms-full.txt") == (
            "# Site\n\n"
            "<!-- Source: [A](https://x.test/a) -->\nA body\n\n\n"
            "<!-- Source: [B](https://x.test/b) -->\nB body"
        )
        assert report.written == [tmp_path / "llms.txt", tmp_path / "llms-full.txt"]
        assert report.candidates == 2
        assert report.eligible == 2

    def test_files_start_with_bom(self, tmp_path: Path):
        generate_llms_files_sync([_item("/a.html", "A")], tmp_path, CONFIG)
        assert (tmp_path / "llms.txt").read_bytes().startswith(b"\xef\xbb\xbf")
        assert (tmp_path / "llms-full.txt").read_bytes().startswith(b"\xef\xbb\xbf")

    def test_draft_scenario(self, tmp_path: Path):
        items = [_item("/a.html", "A"), _item("/b.html", "B", draft=True)]
        generate_llms_files_sync(items, tmp_path, LlmsConfig(header_text="# Site"))
        assert _read(tmp_path / "llms.txt") == "# Site\n- [A](/a)\n"
        assert "B body" not in _read(tmp_path / "llms-full.txt")

    def test_custom_filenames_in_subdirectory(self, tmp_path: Path):
        cfg = LlmsConfig(llms_filename="ai/index.txt", llms_full_filename="ai/full.txt")
        generate_llms_files_sync([_item("/a.html", "A")], tmp_path, cfg)
        assert (tmp_path / "ai" / "index.txt").exists()
        assert (tmp_path / "ai" / "full.txt").exists()

    def test_failure_on_one_item_keeps_others(self, tmp_path: Path):
        items = [
            _item("/a.html", "A"),
            _item("/bad.html", "Bad", body=RuntimeError("unreadable")),
            _item("/c.html", "C"),
        ]
        report = generate_llms_files_sync(items, tmp_path, CONFIG)
        index = _read(tmp_path / "llms.txt")
        full = _read(tmp_path / "llms-full.txt")
        assert "[A]" in index and "[C]" in index and "[Bad]" not in index
        assert "A body" in full and "C body" in full
        assert [d.input_path for d in report.dropped] == ["./bad.md"]

    def test_blank_body_in_neither_artifact(self, tmp_path: Path):
        items = [_item("/a.html", "A"), _item("/blank.html", "Blank", body="  \n\t")]
        generate_llms_files_sync(items, tmp_path, CONFIG)
        assert "Blank" not in _read(tmp_path / "llms.txt")
        assert "Blank" not in _read(tmp_path / "llms-full.txt")

    def test_idempotent(self, tmp_path: Path):
        items = [_item("/a.html", "A"), _item("/b.html", None, body="  text  ")]
        generate_llms_files_sync(items, tmp_path, CONFIG)
        first = ((tmp_path / "llms.txt").read_bytes(), (tmp_path / "llms-full.txt").read_bytes())
        generate_llms_files_sync(items, tmp_path, CONFIG)
        second = ((tmp_path / "llms.txt").read_bytes(), (tmp_path / "llms-full.txt").read_bytes())
        assert first == second

    def test_each_body_resolved_once(self, tmp_path: Path):
        calls: list[str] = []

        async def source() -> str:
            calls.append("a")
            return "A"

        item = ContentItem(input_path="a.md", url="/a.html", body_source=source)
        generate_llms_files_sync([item], tmp_path, CONFIG)
        assert calls == ["a"]


class TestEarlyExit:
    def test_empty_collection_writes_nothing(self, tmp_path: Path, caplog):
        with caplog.at_level(logging.INFO, logger="llmstxt.pipeline"):
            report = generate_llms_files_sync([], tmp_path, CONFIG)
        assert list(tmp_path.iterdir()) == []
        assert report.written == []
        assert not report.has_errors
        assert any("No collection items" in r.getMessage() for r in caplog.records)

    def test_nothing_eligible_writes_nothing(self, tmp_path: Path):
        items = [_item("/a.html", "A", draft=True), _item("", "B")]
        report = generate_llms_files_sync(items, tmp_path, CONFIG)
        assert list(tmp_path.iterdir()) == []
        assert report.candidates == 0

    def test_nothing_resolved_writes_nothing(self, tmp_path: Path):
        items = [_item("/a.html", "A", body=RuntimeError("x"))]
        report = generate_llms_files_sync(items, tmp_path, CONFIG)
        assert list(tmp_path.iterdir()) == []
        assert report.candidates == 1
        assert report.eligible == 0


class TestWriteFailures:
    def test_index_failure_does_not_block_full_dump(self, tmp_path: Path):
        real_write = writers._atomic_write

        def flaky(path: Path, content: str, encoding: str = "utf-8") -> None:
            if path.name == "llms.txt":
                raise PermissionError("read-only")
            real_write(path, content, encoding)

        with patch("llmstxt.writers._atomic_write", side_effect=flaky):
            report = generate_llms_files_sync([_item("/a.html", "A")], tmp_path, CONFIG)

        assert not (tmp_path / "llms.txt").exists()
        assert (tmp_path / "llms-full.txt").exists()
        assert report.has_errors
        assert report.errors[0].source == "llms.txt"
        assert report.written == [tmp_path / "llms-full.txt"]

    def test_unencodable_body_only_fails_full_dump(self, tmp_path: Path):
        items = [_item("/a.html", "A", body="bad \ud800 text")]
        report = generate_llms_files_sync(items, tmp_path, CONFIG)

        assert _read(tmp_path / "llms.txt") == "# Site\n- [A](https://x.test/a)\n"
        assert not (tmp_path / "llms-full.txt").exists()
        assert [e.source for e in report.errors] == ["llms-full.txt"]
        assert sorted(p.name for p in tmp_path.iterdir()) == ["llms.txt"]


class TestAsyncEntryPoint:
    def test_runs_inside_existing_loop(self, tmp_path: Path):
        async def run():
            return await generate_llms_files([_item("/a.html", "A")], tmp_path, CONFIG)

        report = asyncio.run(run())
        assert len(report.written) == 2


class TestLogging:
    def test_index_count_excludes_blank_bodies(self, tmp_path: Path, caplog):
        items = [_item("/a.html", "A"), _item("/blank.html", "Blank", body="  \n")]
        with caplog.at_level(logging.INFO, logger="llmstxt.pipeline"):
            generate_llms_files_sync(items, tmp_path, CONFIG)
        messages = [r.getMessage() for r in caplog.records]
        assert any("llms.txt" in m and "with 1 items" in m for m in messages)
