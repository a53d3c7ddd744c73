"""Unit tests for core/assets.py using an in-memory asset store"""

from pathlib import Path
from typing import Optional

import pytest

from pageimport.core.assets import AssetResolver, StoredAsset, locate


class FakeStore:
    """Records registrations; lookup is by filename only."""

    def __init__(self, existing: dict[str, StoredAsset] = None):
        self.by_name: dict[str, StoredAsset] = dict(existing or {})
        self.registered: list[tuple[Path, str, Optional[int]]] = []

    def find_by_filename(self, filename: str) -> Optional[StoredAsset]:
        return self.by_name.get(filename)

    def register(self, local_path: Path, suggested_filename: str, parent_id: Optional[int] = None) -> StoredAsset:
        self.registered.append((local_path, suggested_filename, parent_id))
        asset = StoredAsset(id=len(self.registered), url=f"/media/{suggested_filename}")
        self.by_name[suggested_filename] = asset
        return asset

    def keep_pending(self) -> None:
        pass

    def discard_pending(self) -> int:
        return 0


@pytest.fixture(name="folders")
def folders_fixture(tmp_path):
    first, second = tmp_path / "first", tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "a.jpg").write_bytes(b"first-a")
    (second / "a.jpg").write_bytes(b"second-a")
    (second / "b.png").write_bytes(b"b")
    return [str(first), str(second)]


@pytest.fixture(name="docs_dir")
def docs_dir_fixture(tmp_path):
    d = tmp_path / "docs"
    d.mkdir()
    (d / "report.pdf").write_bytes(b"%PDF-1.4")
    (d / "My Sheet.xlsx").write_bytes(b"xlsx")
    return str(d)


def test_locate_first_folder_wins(folders):
    assert locate("a.jpg", folders) == Path(folders[0]) / "a.jpg"
    assert locate("b.png", folders) == Path(folders[1]) / "b.png"


def test_locate_missing_folder_skipped(tmp_path, folders):
    assert locate("b.png", [str(tmp_path / "nope"), *folders]) == Path(folders[1]) / "b.png"
    assert locate("zzz.gif", folders) is None


def test_resolve_registers_new_asset(folders):
    store = FakeStore()
    asset = AssetResolver(store, parent_id=7).resolve("a.jpg", folders)
    assert asset == StoredAsset(id=1, url="/media/a.jpg")
    assert store.registered == [(Path(folders[0]) / "a.jpg", "a.jpg", 7)]


def test_resolve_reuses_existing_store_entry(folders):
    """A filename already in the store wins over the local file; nothing new is registered."""
    existing = StoredAsset(id=99, url="/media/old/a.jpg")
    store = FakeStore({"a.jpg": existing})
    assert AssetResolver(store).resolve("a.jpg", folders) == existing
    assert store.registered == []


def test_resolve_missing_file_returns_none(folders):
    store = FakeStore()
    assert AssetResolver(store).resolve("missing.jpg", folders) is None
    assert store.registered == []


def test_lead_and_body_share_one_registration(folders):
    """The same filename used as lead image and in the body is registered once."""
    store = FakeStore()
    resolver = AssetResolver(store)
    lead = resolver.resolve_lead_image("a.jpg", folders)
    body, refs = resolver.rewrite_image_refs('<img src="../x/a.jpg?v=2" alt="">', folders)
    assert len(store.registered) == 1
    assert refs[0].resolved_location == lead.url
    assert body == f'<img src="{lead.url}" alt="">'


def test_rewrite_image_refs_replaces_every_occurrence(folders):
    body = (
        '<figure><img src="imgs/a.jpg"/></figure>'
        '<p><img alt="x" src="imgs/a.jpg"/></p>'
        '<img src="imgs/b%20missing.png"/>'
    )
    store = FakeStore()
    new_body, refs = AssetResolver(store).rewrite_image_refs(body, folders)
    assert new_body.count('src="/media/a.jpg"') == 2
    assert 'src="imgs/b%20missing.png"' in new_body
    assert [r.original_filename for r in refs] == ["a.jpg", "b missing.png"]
    assert refs[1].resolved_location is None
    assert len(store.registered) == 1


def test_rewrite_image_refs_no_folders_leaves_body(folders):
    body = '<img src="a.jpg"/>'
    new_body, refs = AssetResolver(FakeStore()).rewrite_image_refs(body, [])
    assert new_body == body
    assert refs[0].resolved_location is None


def test_rewrite_document_refs(docs_dir):
    body = (
        '<a href="../files/report.pdf">Report</a>'
        '<a href="files/My%20Sheet.xlsx">Sheet</a>'
        '<a href="page.html">Page</a>'
        '<a href="gone.docx">Gone</a>'
    )
    store = FakeStore()
    new_body, refs = AssetResolver(store).rewrite_document_refs(body, docs_dir)
    assert 'href="/media/report.pdf"' in new_body
    assert 'href="page.html"' in new_body
    assert 'href="gone.docx"' in new_body
    assert [r.original_filename for r in refs] == ["report.pdf", "My Sheet.xlsx", "gone.docx"]
    assert 'href="/media/My Sheet.xlsx"' in new_body
    assert len(store.registered) == 2


def test_rewrite_document_refs_no_folder():
    body = '<a href="report.pdf">r</a>'
    assert AssetResolver(FakeStore()).rewrite_document_refs(body, "")[0] == body
