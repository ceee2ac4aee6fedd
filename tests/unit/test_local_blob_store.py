from pathlib import Path
from unittest.mock import patch

import pytest

from app.storage.exceptions import BlobNotFoundError, StorageError, UnsupportedStorageUrlError
from app.storage.local_adapter import LocalBlobStore

BASE_URL = "http://localhost:3000/files"


def _make_store(root: Path, max_object_bytes: int = 5 * 1024 * 1024) -> LocalBlobStore:
    return LocalBlobStore(root=root, public_base_url=BASE_URL, max_object_bytes=max_object_bytes)


class TestStore:
    def test_writes_under_owner_key(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)

        stored = store.store("u1", "resume.pdf", b"%PDF data", "application/pdf")

        assert stored.storage_key == "resumes/u1/resume.pdf"
        assert stored.public_url == f"{BASE_URL}/resumes/u1/resume.pdf"
        assert stored.content_type == "application/pdf"
        assert (tmp_path / "resumes" / "u1" / "resume.pdf").read_bytes() == b"%PDF data"

    def test_second_write_overwrites(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)
        store.store("u1", "resume.pdf", b"first", "application/pdf")

        store.store("u1", "resume.pdf", b"second", "application/pdf")

        assert store.download("resumes/u1/resume.pdf") == b"second"

    def test_leaves_no_temporary_files(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)
        store.store("u1", "resume.pdf", b"x" * (LocalBlobStore.CHUNK_SIZE * 2 + 1), "application/pdf")

        assert [p.name for p in (tmp_path / "resumes" / "u1").iterdir()] == ["resume.pdf"]

    def test_quotes_public_url(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)

        stored = store.store("u1", "my resume.pdf", b"data", "application/pdf")

        assert stored.public_url == f"{BASE_URL}/resumes/u1/my%20resume.pdf"

    def test_rejects_empty_file_name(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="file_name"):
            _make_store(tmp_path).store("u1", "", b"data", "application/pdf")

    def test_rejects_oversized_content(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="limit"):
            _make_store(tmp_path, max_object_bytes=4).store("u1", "a.pdf", b"12345", "application/pdf")

    def test_raises_storage_error_on_write_failure(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)
        with patch("app.storage.local_adapter.os.replace", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError, match="Storage write failed"):
                store.store("u1", "resume.pdf", b"data", "application/pdf")
        assert not (tmp_path / "resumes" / "u1" / "resume.pdf").exists()
        assert list((tmp_path / "resumes" / "u1").iterdir()) == []


class TestIterStore:
    def test_reports_progress_then_document(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)
        content = b"x" * (LocalBlobStore.CHUNK_SIZE + 10)

        events = list(store.iter_store("u1", "resume.pdf", content, "application/pdf"))

        assert [e.bytes_transferred for e in events] == [
            LocalBlobStore.CHUNK_SIZE,
            len(content),
            len(content),
        ]
        assert all(e.total_bytes == len(content) for e in events)
        assert [e.done for e in events] == [False, False, True]
        assert events[-1].stored_document is not None

    def test_target_absent_until_final_event(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)
        content = b"x" * (LocalBlobStore.CHUNK_SIZE * 2)
        target = tmp_path / "resumes" / "u1" / "resume.pdf"

        events = store.iter_store("u1", "resume.pdf", content, "application/pdf")
        next(events)

        assert not target.exists()
        list(events)
        assert target.read_bytes() == content


class TestReadBack:
    def test_key_from_url_round_trips_public_url(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)
        stored = store.store("u1", "my resume.pdf", b"data", "application/pdf")

        assert store.key_from_url(stored.public_url) == "resumes/u1/my resume.pdf"

    def test_key_from_url_rejects_foreign_url(self, tmp_path: Path) -> None:
        with pytest.raises(UnsupportedStorageUrlError):
            _make_store(tmp_path).key_from_url("https://example.com/resumes/u1/resume.pdf")

    def test_key_from_url_rejects_traversal(self, tmp_path: Path) -> None:
        with pytest.raises(UnsupportedStorageUrlError):
            _make_store(tmp_path).key_from_url(f"{BASE_URL}/resumes/../../etc/passwd")

    def test_exists(self, tmp_path: Path) -> None:
        store = _make_store(tmp_path)
        store.store("u1", "resume.pdf", b"data", "application/pdf")

        assert store.exists("resumes/u1/resume.pdf") is True
        assert store.exists("resumes/u1/other.pdf") is False

    def test_download_missing_raises_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(BlobNotFoundError, match="resumes/u1/missing.pdf"):
            _make_store(tmp_path).download("resumes/u1/missing.pdf")
