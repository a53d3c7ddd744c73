"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

from pageimport.core.models import ImportOptions, PageStatus, SanitizePolicy


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str = "pageimport"
    db_url:           str = "sqlite:///pageimport.db"
    media_dir:        str = Field(default="media",  description="Directory registered assets are copied into")
    media_url:        str = Field(default="/media", description="Public URL prefix for registered assets")
    log_level:        str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")
    page_status:      PageStatus = Field(default=PageStatus.draft, description="Status given to imported pages")
    images_folder:    str = Field(default="", description="Comma-separated folders searched for images")
    documents_folder: str = Field(default="", description="Folder searched for linked documents")
    block_pattern:    Optional[str] = Field(default=None, description="Wrapper template with a {content} placeholder")
    sanitize_policy:  Optional[SanitizePolicy] = Field(default=None, description="full or minimal; unset = minimal only with a block pattern")
    page_parent:      int = Field(default=0, ge=0, description="Parent page id; 0 = top level")
    max_file_size:    int = Field(default=10 * 1024 * 1024, ge=1, description="Largest accepted HTML file in bytes")

    def import_options(self) -> ImportOptions:
        """Build the per-run ImportOptions from the loaded settings."""
        return ImportOptions(
            page_status=self.page_status,
            images_folder=self.images_folder,
            documents_folder=self.documents_folder,
            block_pattern=self.block_pattern or None,
            page_parent=self.page_parent,
            policy=self.sanitize_policy,
        )


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then PAGEIMPORT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"PAGEIMPORT_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
