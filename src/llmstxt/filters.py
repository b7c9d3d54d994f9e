"""Synchronous eligibility rules applied before any body is resolved."""

from __future__ import annotations

from collections.abc import Iterable

from llmstxt.config import LlmsConfig
from llmstxt.models import ContentItem

NOINDEX = "noindex"


def has_output_url(item: ContentItem, config: LlmsConfig) -> bool:
    return bool(item.url)


def is_source_file(item: ContentItem, config: LlmsConfig) -> bool:
    if not config.markdown_only:
        return True
    return bool(item.input_path) and item.input_path.endswith(config.source_extension)


def is_published(item: ContentItem, config: LlmsConfig) -> bool:
    """Drafts and collection-excluded items only pass with ``include_drafts``."""
    if config.include_drafts:
        return True
    meta = item.metadata
    return not (meta.draft or meta.exclude_from_collections)


def allows_llms(item: ContentItem, config: LlmsConfig) -> bool:
    meta = item.metadata
    return meta.robots != NOINDEX and not meta.exclude_from_llms


def has_body_source(item: ContentItem, config: LlmsConfig) -> bool:
    return item.body_source is not None


RULES = (
    has_output_url,
    is_source_file,
    is_published,
    allows_llms,
    has_body_source,
)


def is_eligible(item: ContentItem, config: LlmsConfig) -> bool:
    """Return True when *item* passes every rule."""
    return all(rule(item, config) for rule in RULES)


def filter_items(items: Iterable[ContentItem], config: LlmsConfig) -> list[ContentItem]:
    """Return the eligible items, keeping collection order."""
    return [item for item in items if is_eligible(item, config)]
