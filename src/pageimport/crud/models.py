"""Database table definitions for imported pages, registered assets, and the import log"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, String, Text
from sqlmodel import Field, SQLModel

from pageimport.core.models import PageStatus


class Page(SQLModel, table=True):
    """A page created from one imported HTML file"""
    __tablename__ = "pages"
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(..., index=True, nullable=False)
    content: str = Field(..., sa_column=Column(Text, nullable=False))
    status: PageStatus = Field(default=PageStatus.draft, nullable=False)
    parent_id: Optional[int] = Field(default=None, foreign_key="pages.id", description="Parent page; None = top level")
    featured_asset_id: Optional[int] = Field(default=None, foreign_key="assets.id")
    source_file_name: str = Field(..., sa_column=Column(Text, nullable=False))
    published_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    imported_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class Asset(SQLModel, table=True):
    """A media file or document copied into the managed media directory"""
    __tablename__ = "assets"
    id: Optional[int] = Field(default=None, primary_key=True)
    filename: str = Field(..., index=True, nullable=False, description="Original filename; the dedup key")
    stored_filename: str = Field(..., nullable=False, description="Unique name inside media_dir")
    path: str = Field(..., sa_column=Column(Text, nullable=False))
    url: str = Field(..., sa_column=Column(Text, nullable=False))
    title: str = Field(default="", nullable=False)
    mime_type: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    parent_page_id: Optional[int] = Field(default=None, index=True, description="Page the asset was first imported for")
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class ImportLog(SQLModel, table=True):
    """One row per attempted file import, successful or not"""
    __tablename__ = "import_log"
    id: Optional[int] = Field(default=None, primary_key=True)
    page_id: Optional[int] = Field(default=None, index=True)
    file_name: str = Field(..., nullable=False)
    status: str = Field(default="success", index=True, nullable=False)
    message: str = Field(default="", sa_column=Column(Text, nullable=False))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
