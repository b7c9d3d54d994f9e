"""Per-run report of dropped items, write failures, and written artifacts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class PipelineError(BaseModel):
    """A recoverable failure recorded during a generation run."""

    stage: str
    message: str
    source: str = ""
    error_type: str = ""


class DroppedItem(BaseModel):
    """An item removed by the content resolver."""

    input_path: str
    reason: str


class GenerationReport(BaseModel):
    """Collects everything a run recovered from.

    Nothing in a generation run raises to the caller; failures land here
    and in the log instead.
    """

    errors: list[PipelineError] = Field(default_factory=list)
    dropped: list[DroppedItem] = Field(default_factory=list)
    written: list[Path] = Field(default_factory=list)
    candidates: int = 0
    eligible: int = 0

    def add_error(
        self,
        stage: str,
        message: str,
        *,
        source: str = "",
        error_type: str = "",
    ) -> None:
        self.errors.append(
            PipelineError(stage=stage, message=message, source=source, error_type=error_type)
        )

    def add_dropped(self, input_path: str, reason: str) -> None:
        self.dropped.append(DroppedItem(input_path=input_path, reason=reason))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
