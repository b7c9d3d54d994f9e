"""llmstxt - derive llms.txt and llms-full.txt from rendered site content."""

from llmstxt.config import LlmsConfig, load_config, resolve_config
from llmstxt.errors import GenerationReport
from llmstxt.models import ContentItem, EligibleItem, ItemMetadata
from llmstxt.pipeline import generate_llms_files, generate_llms_files_sync
from llmstxt.plugin import LlmsPlugin

__version__ = "0.1.0"

__all__ = [
    "ContentItem",
    "EligibleItem",
    "GenerationReport",
    "ItemMetadata",
    "LlmsConfig",
    "LlmsPlugin",
    "generate_llms_files",
    "generate_llms_files_sync",
    "load_config",
    "resolve_config",
]
