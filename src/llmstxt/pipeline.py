"""Generation pipeline: content collection → llms.txt + llms-full.txt."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from llmstxt.config import LlmsConfig
from llmstxt.errors import GenerationReport
from llmstxt.filters import filter_items
from llmstxt.models import ContentItem
from llmstxt.resolver import resolve_content
from llmstxt.writers import build_full_dump, build_index, write_artifact

logger = logging.getLogger(__name__)


async def generate_llms_files(
    items: Sequence[ContentItem],
    output_dir: Path,
    config: LlmsConfig,
    *,
    report: GenerationReport | None = None,
) -> GenerationReport:
    """Run one full generation over a collection snapshot.

    Filters the collection, resolves every remaining body exactly once, then
    writes the index and the full dump from that same eligible set. Both
    files are rewritten from scratch on every run.

    Args:
        items: Every content item the site build produced, in collection order.
        output_dir: The build's output directory.
        config: Resolved generation settings.
        report: Optional report to fill; a new one is created otherwise.

    Returns:
        The report with dropped items, write failures, and written paths.
    """
    if report is None:
        report = GenerationReport()

    if not items:
        logger.warning("No collection items found. Ensure the site build produced content.")
        return report

    candidates = filter_items(items, config)
    report.candidates = len(candidates)
    if not candidates:
        logger.info("No items left after eligibility filtering.")
        return report

    eligible = await resolve_content(candidates, report=report)
    report.eligible = len(eligible)
    if not eligible:
        logger.info("No eligible items with valid content found to generate LLM files.")
        return report

    output_dir = Path(output_dir)

    index_path = output_dir / config.llms_filename
    entries = sum(1 for entry in eligible if entry.has_content)
    if write_artifact(index_path, build_index(eligible, config), report=report):
        logger.info(
            "Generated %s at %s with %d items.", config.llms_filename, index_path, entries
        )

    full_path = output_dir / config.llms_full_filename
    if write_artifact(full_path, build_full_dump(eligible, config), report=report):
        logger.info("Generated %s at %s.", config.llms_full_filename, full_path)

    return report


def generate_llms_files_sync(
    items: Sequence[ContentItem],
    output_dir: Path,
    config: LlmsConfig,
    *,
    report: GenerationReport | None = None,
) -> GenerationReport:
    """Blocking wrapper around ``generate_llms_files`` for synchronous hosts."""
    return asyncio.run(generate_llms_files(items, output_dir, config, report=report))
