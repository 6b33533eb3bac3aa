from pathlib import Path
from unittest.mock import patch

import pytest

from app.processor.exceptions import InvalidInputError, IOFailureError
from app.processor.models import UploadedDocument
from app.processor.temp_files import TransientFileManager, sanitize_suffix


def _make_document(content: bytes = b"%PDF-1.4 data", filename: str = "coi.pdf") -> UploadedDocument:
    return UploadedDocument(filename=filename, content=content)


class TestAcquire:
    def test_writes_bytes_to_unique_file(self, tmp_path: Path) -> None:
        manager = TransientFileManager(temp_dir=tmp_path)

        first = manager.acquire(_make_document())
        second = manager.acquire(_make_document())

        assert first != second
        assert first.read_bytes() == b"%PDF-1.4 data"
        assert first.parent == tmp_path
        assert first.name.startswith("upload-")
        assert first.name.endswith("coi.pdf")

    def test_empty_document_raises_invalid_input(self, tmp_path: Path) -> None:
        manager = TransientFileManager(temp_dir=tmp_path)

        with pytest.raises(InvalidInputError, match="empty"):
            manager.acquire(_make_document(content=b""))

        assert list(tmp_path.iterdir()) == []

    def test_zero_bytes_on_disk_raises_io_failure(self, tmp_path: Path) -> None:
        manager = TransientFileManager(temp_dir=tmp_path)

        with patch("app.processor.temp_files.os.fdopen") as mock_fdopen:
            mock_fdopen.return_value.__enter__.return_value.write.return_value = 0
            with pytest.raises(IOFailureError, match="empty after copying"):
                manager.acquire(_make_document())

        assert list(tmp_path.iterdir()) == []

    def test_missing_temp_dir_raises_io_failure(self, tmp_path: Path) -> None:
        manager = TransientFileManager(temp_dir=tmp_path / "missing")

        with pytest.raises(IOFailureError, match="Could not create"):
            manager.acquire(_make_document())


class TestRelease:
    def test_deletes_file(self, tmp_path: Path) -> None:
        manager = TransientFileManager(temp_dir=tmp_path)
        path = manager.acquire(_make_document())

        manager.release(path)

        assert not path.exists()

    def test_missing_file_is_ignored(self, tmp_path: Path) -> None:
        manager = TransientFileManager(temp_dir=tmp_path)
        manager.release(tmp_path / "gone.pdf")

    def test_none_is_ignored(self) -> None:
        TransientFileManager().release(None)

    def test_unlink_error_is_logged_not_raised(self, tmp_path: Path) -> None:
        manager = TransientFileManager(temp_dir=tmp_path)
        path = manager.acquire(_make_document())

        with (
            patch.object(Path, "unlink", side_effect=PermissionError("denied")),
            patch("app.processor.temp_files.Log") as mock_log,
        ):
            manager.release(path)

        mock_log.error.assert_called_once()


class TestSanitizeSuffix:
    def test_strips_directories(self) -> None:
        assert sanitize_suffix("../../etc/passwd") == "passwd"

    def test_strips_windows_directories(self) -> None:
        assert sanitize_suffix("C:\\docs\\policy.pdf") == "policy.pdf"

    def test_replaces_unsafe_characters(self) -> None:
        assert sanitize_suffix("my policy (1).pdf") == "my_policy__1_.pdf"
