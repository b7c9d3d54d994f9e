"""Text assembly and file output for llms.txt and llms-full.txt."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from llmstxt.config import LlmsConfig
from llmstxt.errors import GenerationReport
from llmstxt.models import EligibleItem
from llmstxt.urls import resolve_url

logger = logging.getLogger(__name__)

BOM = "\ufeff"
BLOCK_SEPARATOR = "\n\n\n"


def item_title(entry: EligibleItem, config: LlmsConfig) -> str:
    return config.title_for(entry.item.input_path, entry.item.title)


def item_link(entry: EligibleItem, config: LlmsConfig) -> str:
    return resolve_url(entry.item.url, config.site_url)


def build_index(items: Sequence[EligibleItem], config: LlmsConfig) -> str:
    """Render llms.txt: the header, then one link per item, newest first.

    Items are listed in reverse collection order. Items whose body trims
    to nothing are left out.
    """
    lines = [
        f"- [{item_title(entry, config)}]({item_link(entry, config)})\n"
        for entry in reversed(items)
        if entry.has_content
    ]
    content = config.header_text
    if lines:
        content += "\n"
    return content + "".join(lines)


def build_full_dump(items: Sequence[EligibleItem], config: LlmsConfig) -> str:
    """Render llms-full.txt: the header, then every trimmed body in collection order.

    With ``include_source_comment`` each body is preceded by a
    ``<!-- Source: [title](url) -->`` line. Blocks are separated by two
    blank lines and trailing whitespace is removed from the result.
    """
    parts = [config.header_text, "\n\n"]
    for entry in items:
        body = entry.content
        if not body:
            continue
        if config.include_source_comment:
            parts.append(
                f"<!-- Source: [{item_title(entry, config)}]({item_link(entry, config)}) -->\n"
            )
        parts.append(body + BLOCK_SEPARATOR)
    return "".join(parts).rstrip()


def _atomic_write(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write *content* to *path* through a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
        Path(temp_path).replace(path)
    except Exception:
        Path(temp_path).unlink(missing_ok=True)
        raise


def write_artifact(
    path: Path,
    content: str,
    *,
    report: GenerationReport | None = None,
) -> bool:
    """Write a BOM-prefixed UTF-8 artifact, logging rather than raising on failure.

    Returns:
        True if the file was written.
    """
    try:
        _atomic_write(path, BOM + content)
    except (OSError, UnicodeError) as exc:
        logger.error("Error writing %s: %s", path, exc)
        if report is not None:
            report.add_error("write", str(exc), source=path.name, error_type="write_error")
        return False
    if report is not None:
        report.written.append(path)
    return True
