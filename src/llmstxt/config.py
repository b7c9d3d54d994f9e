"""Generation settings resolved from options, .llmstxt.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
Host integrations skip the file layers and call ``resolve_config`` with
their plugin options directly.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from llmstxt.urls import format_default_title

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".llmstxt.toml"
CONFIG_SECTION = "llms"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "llmstxt" / "config.toml"

DEFAULT_HEADER_TEXT = (
    "# My Site LLM Data\n\n"
    "This file contains information about the site's content, "
    "formatted for Large Language Models.\n\n"
    "## Documents"
)


class LlmsConfig(BaseModel):
    """Immutable settings for one generator instance.

    Fields accept either their Python name or the camelCase option name
    used by site plugins (``siteUrl``, ``markdownOnly``, ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    header_text: str = Field(default=DEFAULT_HEADER_TEXT, alias="headerText")
    site_url: str = Field(default="", alias="siteUrl")
    llms_filename: str = Field(default="llms.txt", alias="llmsFilename")
    llms_full_filename: str = Field(default="llms-full.txt", alias="llmsFullFilename")
    include_drafts: bool = Field(default=False, alias="includeDrafts")
    markdown_only: bool = Field(default=True, alias="markdownOnly")
    source_extension: str = Field(default=".md", alias="sourceExtension")
    include_source_comment: bool = Field(default=True, alias="includeSourceComment")
    default_title_formatter: Callable[[str], str] = Field(
        default=format_default_title,
        alias="defaultTitleFormatter",
        exclude=True,
    )

    def title_for(self, input_path: str, title: str | None = None) -> str:
        """Return *title* when set, else the formatted fallback for *input_path*."""
        return title or self.default_title_formatter(input_path)


def warn_if_relative(config: LlmsConfig) -> None:
    """Log the operator warning for a config without a site URL."""
    if not config.site_url:
        logger.warning(
            "`site_url` is not set; URLs in %s will be relative. "
            "Provide the site's absolute base URL for absolute links.",
            config.llms_filename,
        )


def resolve_config(options: Mapping[str, Any] | None = None, **overrides: Any) -> LlmsConfig:
    """Merge caller options over the defaults.

    Args:
        options: Plugin-style options, camelCase or snake_case keys.
        **overrides: Extra options applied on top of *options*.

    Returns:
        The resolved LlmsConfig. A missing site URL is logged, not raised.
    """
    data: dict[str, Any] = dict(options or {})
    data.update(overrides)
    config = LlmsConfig.model_validate(data)
    warn_if_relative(config)
    return config


def load_config(path: str | Path | None = None) -> LlmsConfig:
    """Load settings from a TOML file, then overlay environment variables.

    Search order:
    1. Explicit path (if provided)
    2. .llmstxt.toml in CWD
    3. ~/.config/llmstxt/config.toml

    Settings live in the ``[llms]`` table; a file without that table is
    read as a flat table of settings.
    """
    data: dict[str, Any] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        logger.warning("Ignoring non-table [%s] section", CONFIG_SECTION)
        section = {}

    return LlmsConfig.model_validate(_apply_env_vars(dict(section)))


def merge_cli_overrides(config: LlmsConfig, **cli_kwargs: Any) -> LlmsConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the flag was provided (i.e., not None).
    """
    updates = {
        key: value
        for key, value in cli_kwargs.items()
        if value is not None and key in LlmsConfig.model_fields
    }
    if not updates:
        return config
    return config.model_copy(update=updates)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _parse_bool(raw: str) -> bool:
    return raw.lower() in ("true", "1", "yes")


def _apply_env_vars(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to raw settings."""
    env_mapping: dict[str, str] = {
        "LLMSTXT_HEADER_TEXT": "header_text",
        "LLMSTXT_SITE_URL": "site_url",
        "LLMSTXT_LLMS_FILENAME": "llms_filename",
        "LLMSTXT_LLMS_FULL_FILENAME": "llms_full_filename",
    }
    bool_mapping: dict[str, str] = {
        "LLMSTXT_INCLUDE_DRAFTS": "include_drafts",
        "LLMSTXT_MARKDOWN_ONLY": "markdown_only",
        "LLMSTXT_INCLUDE_SOURCE_COMMENT": "include_source_comment",
    }

    for env_var, field in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_field(data, field, value)

    for env_var, field in bool_mapping.items():
        raw = os.environ.get(env_var)
        if raw is not None:
            _set_field(data, field, _parse_bool(raw))

    return data


def _set_field(data: dict[str, Any], field: str, value: Any) -> None:
    # Drop any camelCase spelling so the env value is the one validated.
    alias = LlmsConfig.model_fields[field].alias
    if alias:
        data.pop(alias, None)
    data[field] = value
