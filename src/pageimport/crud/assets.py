"""Asset store backed by the assets table and a local media directory"""

import logging
import mimetypes
import shutil
from pathlib import Path
from typing import Optional
from urllib.parse import quote

import filetype
from sqlmodel import Session, select

from pageimport.core.assets import StoredAsset
from pageimport.core.utils.files import unique_filename
from pageimport.crud.models import Asset


logger = logging.getLogger("pageimport")


def detect_mime_type(path: Path) -> Optional[str]:
    """MIME type from the file signature, falling back to the extension for text formats."""
    kind = filetype.guess(str(path))
    if kind is not None:
        return kind.mime
    return mimetypes.guess_type(path.name)[0]


def list_assets(session: Session) -> list[Asset]:
    """Return all registered assets in registration order."""
    return list(session.exec(select(Asset).order_by(Asset.id)).all())


class SQLAssetStore:
    """AssetStore implementation: filename lookup in the assets table, copies into media_dir.

    Flushes but does not commit. The caller controls the transaction and
    must call discard_pending() after a rollback and keep_pending() after a
    commit, so copied files stay in step with the asset rows.
    """

    def __init__(self, session: Session, media_dir: Path, media_url: str):
        self.session = session
        self.media_dir = Path(media_dir)
        self.media_url = media_url.rstrip('/')
        self._pending: list[Path] = []

    def find_by_filename(self, filename: str) -> Optional[StoredAsset]:
        """Return the earliest registered asset with this original filename."""
        row = self.session.exec(
            select(Asset).where(Asset.filename == filename).order_by(Asset.id)
        ).first()
        return StoredAsset(id=row.id, url=row.url) if row else None

    def register(self, local_path: Path, suggested_filename: str, parent_id: Optional[int] = None) -> StoredAsset:
        """Copy local_path into media_dir under a unique name and insert an Asset row."""
        self.media_dir.mkdir(parents=True, exist_ok=True)
        stored_name = unique_filename(self.media_dir, suggested_filename)
        dest = self.media_dir / stored_name
        shutil.copyfile(local_path, dest)
        self._pending.append(dest)

        row = Asset(
            filename=suggested_filename,
            stored_filename=stored_name,
            path=str(dest),
            url=f"{self.media_url}/{quote(stored_name)}",
            title=Path(suggested_filename).stem,
            mime_type=detect_mime_type(dest),
            parent_page_id=parent_id,
        )
        self.session.add(row)
        self.session.flush()
        logger.debug("Copied %s to %s", local_path, dest)
        return StoredAsset(id=row.id, url=row.url)

    def keep_pending(self) -> None:
        """Forget the files copied since the last commit; their rows are now durable."""
        self._pending.clear()

    def discard_pending(self) -> int:
        """Delete files copied since the last commit. Returns count removed."""
        removed = 0
        for path in self._pending:
            if path.exists():
                path.unlink()
                removed += 1
        if removed:
            logger.debug("Removed %d uncommitted asset files", removed)
        self._pending.clear()
        return removed
