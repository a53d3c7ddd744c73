"""Intermediate and output data models for the HTML import pipeline"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from bs4 import Tag
from pydantic import BaseModel, Field, field_validator

from pageimport.core.errors import ReasonCode


PLACEHOLDER = "{content}"


class PageStatus(str, Enum):
    """Publication status given to imported pages"""
    draft = "draft"
    publish = "publish"
    pending = "pending"


class SanitizePolicy(str, Enum):
    """Attribute-stripping policy applied to the body subtree"""
    full = "full"
    minimal = "minimal"


@dataclass(frozen=True)
class SourceDocument:
    """Raw content of one input file."""
    raw_html: str
    file_name: str


@dataclass
class ExtractedFields:
    """Fields pulled from a parsed tree; body_root is owned by the current run."""
    title:           str
    body_root:       Tag
    raw_date_text:   Optional[str] = None
    first_image_ref: Optional[str] = None


# --- content blocks ---

class Paragraph(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    html: str


class Heading(BaseModel):
    type: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    html: str


class Image(BaseModel):
    """An image, rendered inside a self-contained figure."""
    type: Literal["image"] = "image"
    src: str
    alt: str = ""
    html: str                       # element markup; a <figure> when the source was one


class List(BaseModel):
    type: Literal["list"] = "list"
    ordered: bool = False
    html: str


class Quote(BaseModel):
    type: Literal["quote"] = "quote"
    html: str


class Code(BaseModel):
    type: Literal["code"] = "code"
    text: str                       # already HTML-escaped


class Table(BaseModel):
    type: Literal["table"] = "table"
    html: str


class Separator(BaseModel):
    type: Literal["separator"] = "separator"
    html: str = "<hr/>"


class Html(BaseModel):
    """Markup passed through unchanged (a figure without an image)."""
    type: Literal["html"] = "html"
    html: str


class Raw(BaseModel):
    type: Literal["raw"] = "raw"
    text: str


class Group(BaseModel):
    type: Literal["group"] = "group"
    children: list["ContentBlock"] = Field(..., min_length=1)


ContentBlock = Annotated[
    Union[Paragraph, Heading, Image, List, Quote, Code, Table, Separator, Html, Raw, Group],
    Field(discriminator="type"),
]

Group.model_rebuild()


class StructuredDocument(BaseModel):
    """Final pipeline output, handed to the page-creation collaborator."""
    title: str
    blocks: list[ContentBlock] = []
    published_at: Optional[datetime] = None     # naive local time
    lead_image_filename: Optional[str] = None
    source_file_name: str


class AssetReference(BaseModel):
    """A filename referenced from a body and where it now lives, if anywhere."""
    original_filename: str
    resolved_location: Optional[str] = None


class ImportOptions(BaseModel):
    """Fully-resolved options for one import call."""
    page_status: PageStatus = PageStatus.draft
    images_folder: str = ""
    documents_folder: str = ""
    block_pattern: Optional[str] = None
    page_parent: int = 0
    policy: Optional[SanitizePolicy] = None     # explicit override of the derived policy

    @field_validator("block_pattern")
    @classmethod
    def _has_placeholder(cls, v: Optional[str]) -> Optional[str]:
        if v and PLACEHOLDER not in v:
            raise ValueError(f"block_pattern must contain the {PLACEHOLDER} placeholder")
        return v or None

    @property
    def image_folders(self) -> list[str]:
        """images_folder split on commas, trimmed, empties dropped."""
        return [f.strip() for f in self.images_folder.split(",") if f.strip()]

    @property
    def sanitize_policy(self) -> SanitizePolicy:
        """Minimal when a block pattern supplies its own styling, else full, unless set explicitly."""
        if self.policy is not None:
            return self.policy
        return SanitizePolicy.minimal if self.block_pattern else SanitizePolicy.full


class ImportResult(BaseModel):
    """Outcome of importing one file; failures carry a reason code."""
    file_name: str
    success: bool
    page_id: Optional[int] = None
    title: Optional[str] = None
    featured_image: Optional[str] = None    # "Set" or "Not found"
    reason: Optional[ReasonCode] = None
    message: Optional[str] = None


class ImportSummary(BaseModel):
    """Aggregated outcomes for a batch of files."""
    succeeded: list[ImportResult] = []
    failed: list[ImportResult] = []

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failed)
