"""Site-build integration: collect the collection, generate after the build."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from llmstxt.config import LlmsConfig, resolve_config
from llmstxt.errors import GenerationReport
from llmstxt.models import ContentItem
from llmstxt.pipeline import generate_llms_files

logger = logging.getLogger(__name__)


class LlmsPlugin:
    """Glue between a static-site build and the generation pipeline.

    The host calls ``collect`` from its collection hook and
    ``on_build_complete`` once every template has rendered. The collected
    snapshot lives on the instance and is passed explicitly into the
    pipeline.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        config: LlmsConfig | None = None,
    ) -> None:
        self.config = config if config is not None else resolve_config(options)
        self._items: list[ContentItem] = []

    @property
    def items(self) -> list[ContentItem]:
        return list(self._items)

    def collect(self, items: Iterable[ContentItem]) -> list[ContentItem]:
        """Store the full collection snapshot.

        Returns an empty list so the hook contributes no collection of its own.
        """
        self._items = list(items)
        logger.debug("Collected %d content items", len(self._items))
        return []

    async def on_build_complete(
        self,
        output_dir: str | Path,
        *,
        run_mode: str | None = None,
        output_mode: str | None = None,
    ) -> GenerationReport:
        """Generate both artifacts into *output_dir*.

        ``run_mode`` and ``output_mode`` are accepted from the host event
        but do not affect generation.
        """
        logger.debug("Build complete (run_mode=%s, output_mode=%s)", run_mode, output_mode)
        return await generate_llms_files(self._items, Path(output_dir), self.config)
