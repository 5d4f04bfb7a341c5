"""Value models for documents, sections, items, and operation results"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UpdateMode(str, Enum):
    """How new content is combined with an existing section."""
    append = "append"
    replace = "replace"


class Section(BaseModel):
    """A heading-delimited block of a document. Derived by parsing; never stored on its own."""
    name: str
    level: int = Field(..., ge=1, le=6)
    content: str = ""


@dataclass(frozen=True)
class ItemBoundaries:
    """Inclusive line-range of an item inside a section's content lines."""
    start_index: int
    end_index: int


class DocumentMeta(BaseModel):
    """Frontmatter fields carried alongside a document's raw content."""
    id: str
    created: datetime = Field(default_factory=utc_now)
    updated: datetime = Field(default_factory=utc_now)
    tags: list[str] = []
    status: Optional[str] = None

    @field_validator('created', 'updated')
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)


@dataclass
class Document:
    """A loaded memory document; `content` is the single source of truth."""
    meta:    DocumentMeta
    content: str               # body only (frontmatter stripped)
    path:    Path | None = None

    @property
    def id(self) -> str:
        return self.meta.id


class DocumentListing(BaseModel):
    """One row of the document list."""
    id: str
    created: datetime
    updated: datetime
    tags: list[str] = []
    status: Optional[str] = None
    path: str
    section_count: int


class SectionUpdate(BaseModel):
    """Outcome of update_section."""
    document_id: str
    section: str
    mode: UpdateMode
    created: bool                   # True when the section did not exist before

    @property
    def action(self) -> str:
        if self.created:
            return "created"
        return "replaced" if self.mode == UpdateMode.replace else "appended"


class ItemPatch(BaseModel):
    """Outcome of update_list_item."""
    document_id: str
    section: str
    item: str
    fields: list[str]


class ItemMove(BaseModel):
    """Outcome of move_list_item."""
    document_id: str
    item: str
    from_section: str
    to_section: str
    reason: Optional[str] = None
    destination_created: bool
    remaining_items: int


class SearchHit(BaseModel):
    """A section that matched a search query."""
    section: str
    matches: list[str]
    score: int


class ContentAnalysis(BaseModel):
    bullet_count: int = 0
    numbered_count: int = 0
    heading_count: int = 0

    @property
    def total_items(self) -> int:
        return self.bullet_count + self.numbered_count + self.heading_count


class SectionStat(BaseModel):
    name: str
    words: int


class DocumentSummary(BaseModel):
    """Aggregate statistics over a document's sections."""
    meta: DocumentMeta
    total_sections: int
    non_empty_sections: int
    list_sections: int
    total_items: int
    total_words: int
    total_chars: int
    active_sections: list[str]
    days_since_created: int
    days_since_updated: int
    sections: list[SectionStat]
