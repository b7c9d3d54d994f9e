"""Sequential resolution of deferred item bodies.

Bodies are awaited one at a time in collection order so log lines come
out in a predictable order and at most one body is in flight. A failing
body drops only its own item.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from typing import Any

from llmstxt.errors import GenerationReport
from llmstxt.models import BodyResolution, ContentItem, EligibleItem, ResolutionOutcome

logger = logging.getLogger(__name__)


async def resolve_body(source: Any) -> BodyResolution:
    """Await a single body source and classify what it produced."""
    try:
        value = source() if callable(source) else source
        if inspect.isawaitable(value):
            value = await value
        return BodyResolution.from_value(value)
    except Exception as exc:
        return BodyResolution.failed(str(exc) or type(exc).__name__)


async def resolve_content(
    items: Iterable[ContentItem],
    *,
    report: GenerationReport | None = None,
) -> list[EligibleItem]:
    """Resolve each item's body and keep the ones that produced text.

    Args:
        items: Filtered content items, in collection order.
        report: Optional report that records dropped items.

    Returns:
        Eligible items in the same order as *items*.
    """
    eligible: list[EligibleItem] = []
    for item in items:
        resolution = await resolve_body(item.body_source)

        if resolution.outcome is ResolutionOutcome.TEXT:
            eligible.append(EligibleItem(item=item, body=resolution.body or ""))
            continue

        if resolution.outcome is ResolutionOutcome.EMPTY:
            # List and index pages legitimately have no body.
            logger.debug("Content for %s resolved empty. Skipping.", item.input_path)
            reason = "empty body"
        elif resolution.outcome is ResolutionOutcome.NON_TEXT:
            logger.warning(
                "Content for %s did not resolve to a string (type: %s). Skipping.",
                item.input_path,
                resolution.detail,
            )
            reason = f"non-string body ({resolution.detail})"
        else:
            logger.warning(
                "Error resolving content for %s. Skipping. Error: %s",
                item.input_path,
                resolution.detail,
            )
            reason = f"resolution failed: {resolution.detail}"

        if report is not None:
            report.add_dropped(item.input_path, reason)

    return eligible
