"""Build a content collection from a directory of rendered Markdown files.

Stands in for a site build when running from the command line: every file
under the content directory becomes one ``ContentItem``. Front matter is
read eagerly so items can be filtered; bodies are read lazily when the
resolver awaits them.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import re
from datetime import date
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import ValidationError

from llmstxt.models import ContentItem, ItemMetadata

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
INDEX_STEM = "index"

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontMatterError(ValueError):
    """Front matter exists but is not a YAML mapping."""


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split leading ``---`` fenced YAML from the body.

    Returns:
        (front matter mapping, body). Text without front matter yields
        an empty mapping and the text unchanged.

    Raises:
        FrontMatterError: If the fenced block is not valid YAML or not a mapping.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"invalid YAML front matter: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front matter must be a mapping, got {type(data).__name__}"
        )
    return data, text[match.end():]


def derive_url(relative_path: PurePosixPath, front_matter: dict[str, Any]) -> str:
    """Compute the output URL a static-site build would give this file.

    A ``permalink`` or ``url`` key wins. ``index.md`` maps to its
    directory, other Markdown pages to ``<path>.html``, and any other file
    keeps its own path.
    """
    for key in ("permalink", "url"):
        value = front_matter.get(key)
        if isinstance(value, str) and value:
            return value if value.startswith("/") else f"/{value}"

    if relative_path.suffix != MARKDOWN_SUFFIX:
        return f"/{relative_path.as_posix()}"
    if relative_path.stem == INDEX_STEM:
        parent = relative_path.parent.as_posix()
        return "/" if parent == "." else f"/{parent}/"
    return f"/{relative_path.with_suffix('.html').as_posix()}"


async def _read_body(path: Path) -> str:
    text = await asyncio.to_thread(path.read_text, encoding="utf-8")
    _, body = split_front_matter(text)
    return body


async def _raise(exc: Exception) -> str:
    raise exc


def _iter_files(content_dir: Path) -> list[Path]:
    files = []
    for path in sorted(content_dir.rglob("*")):
        rel = path.relative_to(content_dir)
        if any(part.startswith(".") for part in rel.parts):
            continue
        if path.is_file():
            files.append(path)
    return files


def parse_metadata(front_matter: dict[str, Any], path: Path) -> ItemMetadata:
    """Validate front matter, dropping known keys whose values have the wrong type.

    A date-valued ``title`` (YAML reads ``2024-01-01`` as a date) is kept as
    its ISO string. Any other mistyped key is ignored with a warning so the
    rest of the item still publishes.
    """
    data = dict(front_matter)
    if isinstance(data.get("title"), date):
        data["title"] = data["title"].isoformat()
    try:
        return ItemMetadata.model_validate(data)
    except ValidationError as exc:
        bad_keys = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
        logger.warning(
            "Ignoring mistyped front matter in %s: %s", path, ", ".join(sorted(bad_keys))
        )
        for key in bad_keys:
            data.pop(key, None)
        return ItemMetadata.model_validate(data)


def load_item(path: Path, content_dir: Path) -> ContentItem:
    """Build one ContentItem for *path*.

    Unreadable files and broken front matter still produce an item; its
    body source raises so the resolver drops it with a warning.
    """
    rel = PurePosixPath(path.relative_to(content_dir).as_posix())
    input_path = f"./{rel.as_posix()}"

    front_matter: dict[str, Any] = {}
    error: Exception | None = None
    if path.suffix == MARKDOWN_SUFFIX:
        try:
            front_matter, _ = split_front_matter(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, FrontMatterError) as exc:
            logger.warning("Could not read front matter from %s: %s", path, exc)
            error = exc

    try:
        metadata = parse_metadata(front_matter, path)
    except ValidationError as exc:
        logger.warning("Invalid front matter in %s: %s", path, exc)
        metadata = ItemMetadata()
        error = exc

    if error is not None:
        body_source = functools.partial(_raise, error)
    else:
        body_source = functools.partial(_read_body, path)

    return ContentItem(
        input_path=input_path,
        url=derive_url(rel, front_matter),
        metadata=metadata,
        body_source=body_source,
    )


def load_directory(content_dir: Path) -> list[ContentItem]:
    """Return one item per visible file under *content_dir*, in sorted path order."""
    content_dir = Path(content_dir)
    if not content_dir.is_dir():
        logger.warning("Content directory not found: %s", content_dir)
        return []
    items = [load_item(path, content_dir) for path in _iter_files(content_dir)]
    logger.info("Loaded %d content items from %s", len(items), content_dir)
    return items
