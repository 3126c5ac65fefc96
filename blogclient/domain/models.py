"""Pydantic models shared between the fetch service and the view layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PostSummary(BaseModel):
    """One post as returned by the content service.

    The record is owned by the remote endpoint; unknown fields are kept
    verbatim so the renderer sees exactly what the server sent.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: Any = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ResultPage(BaseModel):
    """Immutable snapshot of one page of listing or search results."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: tuple[PostSummary, ...] = ()
    page_number: int = Field(default=1, ge=1, alias="pageNumber")
    total_pages: int = Field(default=0, ge=0, alias="totalPages")

    @classmethod
    def empty(cls) -> "ResultPage":
        return cls(items=(), page_number=1, total_pages=0)


__all__ = ["PostSummary", "ResultPage"]
