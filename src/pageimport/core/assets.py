"""Asset resolution: locate referenced files, dedupe by filename, rewrite body references"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Protocol

from pageimport.core.models import AssetReference
from pageimport.core.utils.urls import filename_from_ref


logger = logging.getLogger("pageimport")

DOCUMENT_EXTENSIONS = ('pdf', 'doc', 'docx', 'xls', 'xlsx', 'ppt', 'pptx', 'zip', 'txt', 'csv')

IMG_SRC_RE = re.compile(r'<img[^>]+src="([^"]+)"[^>]*>', re.IGNORECASE)
DOC_HREF_RE = re.compile(r'href="([^"]+\.(?:' + '|'.join(DOCUMENT_EXTENSIONS) + r'))"', re.IGNORECASE)


@dataclass(frozen=True)
class StoredAsset:
    """An asset registered in the destination store."""
    id: int
    url: str


class AssetStore(Protocol):
    """Capability the resolver and the import pipeline need from the destination asset store."""

    def find_by_filename(self, filename: str) -> Optional[StoredAsset]: ...

    def register(self, local_path: Path, suggested_filename: str, parent_id: Optional[int] = None) -> StoredAsset: ...

    def keep_pending(self) -> None: ...

    def discard_pending(self) -> int: ...


def locate(filename: str, folders: Iterable[str]) -> Optional[Path]:
    """Return the first folders/filename that exists as a file; missing folders are skipped."""
    for folder in folders:
        candidate = Path(folder) / filename
        if candidate.is_file():
            return candidate
    return None


class AssetResolver:
    """Resolves filenames to stored assets for one pipeline run.

    A filename is registered at most once per run; the store is queried by
    filename before every registration, so a name already in the store wins
    over a different local file with the same name.
    """

    def __init__(self, store: AssetStore, parent_id: Optional[int] = None):
        self.store = store
        self.parent_id = parent_id
        self._resolved: dict[str, StoredAsset] = {}

    def resolve(self, filename: str, folders: Iterable[str]) -> Optional[StoredAsset]:
        """Locate filename in folders and return its stored asset, registering it if new."""
        if filename in self._resolved:
            return self._resolved[filename]

        path = locate(filename, folders)
        if path is None:
            logger.warning("Asset %s not found in any search folder", filename)
            return None

        asset = self.store.find_by_filename(filename)
        if asset is None:
            asset = self.store.register(path, filename, self.parent_id)
            logger.info("Registered asset %s as #%s", filename, asset.id)
        else:
            logger.debug("Reusing stored asset #%s for %s", asset.id, filename)

        self._resolved[filename] = asset
        return asset

    def resolve_lead_image(self, filename: str, folders: Iterable[str]) -> Optional[StoredAsset]:
        """Resolve the document's lead image against the image folders."""
        return self.resolve(filename, list(folders))

    def _rewrite(
        self,
        body: str,
        pattern: re.Pattern,
        attr: str,
        folders: list[str],
        ) -> tuple[str, list[AssetReference]]:
        refs: list[AssetReference] = []
        replacements: dict[str, str] = {}

        for ref in dict.fromkeys(pattern.findall(body)):
            filename = filename_from_ref(ref)
            asset = self.resolve(filename, folders) if filename else None
            refs.append(AssetReference(original_filename=filename, resolved_location=asset.url if asset else None))
            if asset:
                replacements[ref] = asset.url

        for old, new in replacements.items():
            body = body.replace(f'{attr}="{old}"', f'{attr}="{new}"')
        return body, refs

    def rewrite_image_refs(self, body: str, folders: Iterable[str]) -> tuple[str, list[AssetReference]]:
        """Resolve every distinct <img src> in body and substitute the resolved URLs."""
        return self._rewrite(body, IMG_SRC_RE, 'src', list(folders))

    def rewrite_document_refs(self, body: str, folder: str) -> tuple[str, list[AssetReference]]:
        """Resolve document links (pdf, doc, xls, ...) against the documents folder."""
        return self._rewrite(body, DOC_HREF_RE, 'href', [folder] if folder else [])
