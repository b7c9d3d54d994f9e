"""Pure data models for the generation pipeline.

``ContentItem`` is what a site build hands over; ``EligibleItem`` is what
the writers consume. ``BodyResolution`` is the explicit outcome of awaiting
one item's deferred body. No I/O lives here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ItemMetadata(BaseModel):
    """Front-matter flags that decide whether an item is published.

    Unknown keys are kept so hosts can pass their whole data mapping.
    """

    model_config = ConfigDict(extra="allow", frozen=True, coerce_numbers_to_str=True)

    title: str | None = None
    draft: bool | None = None
    exclude_from_collections: bool | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "exclude_from_collections",
            "excludeFromCollections",
            "eleventyExcludeFromCollections",
        ),
    )
    robots: str | None = None
    exclude_from_llms: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("exclude_from_llms", "excludeFromLlms"),
    )


class ContentItem(BaseModel):
    """One rendered page or post as supplied by the site build.

    ``body_source`` is the deferred body: a zero-argument callable returning
    the body (or an awaitable of it), or an awaitable itself. ``None`` means
    the item exposes no body at all.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    input_path: str = ""
    url: str = ""
    metadata: ItemMetadata = Field(default_factory=ItemMetadata)
    body_source: Any = Field(default=None, exclude=True, repr=False)

    @property
    def title(self) -> str | None:
        return self.metadata.title


class ResolutionOutcome(StrEnum):
    """How a deferred body settled."""

    TEXT = "text"
    NON_TEXT = "non_text"
    EMPTY = "empty"
    FAILED = "failed"


class BodyResolution(BaseModel):
    """Result of awaiting one body source."""

    outcome: ResolutionOutcome
    body: str | None = None
    detail: str = ""

    @classmethod
    def from_value(cls, value: object) -> BodyResolution:
        """Classify a successfully resolved value."""
        if isinstance(value, str):
            return cls(outcome=ResolutionOutcome.TEXT, body=value)
        if value is None or str(value).strip() == "":
            return cls(outcome=ResolutionOutcome.EMPTY)
        return cls(outcome=ResolutionOutcome.NON_TEXT, detail=type(value).__name__)

    @classmethod
    def failed(cls, reason: str) -> BodyResolution:
        return cls(outcome=ResolutionOutcome.FAILED, detail=reason)


class EligibleItem(BaseModel):
    """A content item paired with its resolved, untrimmed body."""

    model_config = ConfigDict(frozen=True)

    item: ContentItem
    body: str

    @property
    def content(self) -> str:
        return self.body.strip()

    @property
    def has_content(self) -> bool:
        return bool(self.content)
