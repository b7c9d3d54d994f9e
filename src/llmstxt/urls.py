"""Pure string helpers for link targets and fallback titles."""

from __future__ import annotations

import re
from pathlib import PurePath
from urllib.parse import urljoin

PAGE_SUFFIX = ".html"

_SEPARATOR_RE = re.compile(r"[_-]")
_WORD_START_RE = re.compile(r"\b\w")


def clean_url(url: str) -> str:
    """Drop a trailing ``.html`` so ``/posts/a.html`` becomes ``/posts/a``."""
    return url.removesuffix(PAGE_SUFFIX)


def resolve_url(url: str, site_url: str = "") -> str:
    """Return the clean URL, made absolute against *site_url* when one is set.

    Args:
        url: Output-relative URL of a content item.
        site_url: Absolute base URL of the site. Empty keeps links relative.

    Returns:
        The link target written into both artifacts.
    """
    cleaned = clean_url(url)
    if not site_url:
        return cleaned
    return urljoin(site_url, cleaned)


def format_default_title(input_path: str) -> str:
    """Derive a title from a source path's file stem.

    ``posts/my-cool_post.md`` becomes ``My Cool Post``.
    """
    stem = PurePath(input_path).stem
    spaced = _SEPARATOR_RE.sub(" ", stem)
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), spaced)
